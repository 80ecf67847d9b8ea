"""HTML front end that proxies every action to the student record API."""
