"""Student records: a record API and the HTML front end that drives it.

The package holds two FastAPI applications. `main` exposes the
`/api/students` resource backed by SQLModel; `frontend.main` renders
forms and forwards every user action to that resource over HTTP.
Individual modules contain the concrete implementations and documentation.
"""
