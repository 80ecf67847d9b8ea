"""Inline HTML pages for the student front end.

Pages are small enough to build as strings; every value that came from a
user or from the API goes through `html.escape`.
"""

from html import escape
from typing import Iterable, List, Optional

from .forms import FieldError, StudentForm

_STYLE = """
  body { font-family: Arial, sans-serif; margin: 32px; }
  a { color: #0a6; }
  table { border-collapse: collapse; }
  th, td { border-bottom: 1px solid #ddd; padding: 6px 12px; text-align: left; }
  .error { color: #b00; }
  .card { max-width: 640px; padding: 16px; border: 1px solid #ddd; border-radius: 8px; }
"""


def _page(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8" />
  <title>{escape(title)}</title>
  <style>{_STYLE}</style>
</head>
<body>
  <h1>{escape(title)}</h1>
{body}
</body>
</html>
"""


def _form_errors(errors: Iterable[FieldError]) -> str:
    items = "".join(f"<li>{escape(e.message)}</li>" for e in errors if e.field == "")
    return f'  <ul class="error">{items}</ul>\n' if items else ""


def _field(label: str, name: str, value: str, errors: List[FieldError], kind: str = "text") -> str:
    msgs = "".join(f'<span class="error">{escape(e.message)}</span>' for e in errors if e.field == name)
    return (
        f'    <p><label for="{name}">{escape(label)}</label><br />'
        f'<input type="{kind}" id="{name}" name="{name}" value="{escape(value)}" /> {msgs}</p>\n'
    )


def render_list(students: List[dict], search: Optional[str] = None) -> str:
    rows = "".join(
        "    <tr>"
        f"<td>{escape(str(s.get('id')))}</td>"
        f"<td>{escape(s.get('name') or '')}</td>"
        f"<td>{escape(s.get('email') or '')}</td>"
        f"<td>{escape(s.get('phone') or '')}</td>"
        f"<td>{escape((s.get('dateOfBirth') or '')[:10])}</td>"
        f"<td><a href=\"/students/{escape(str(s.get('id')))}/edit\">Edit</a> | "
        f"<a href=\"/students/{escape(str(s.get('id')))}/delete\">Delete</a></td>"
        "</tr>\n"
        for s in students
    )
    body = f"""  <form method="get" action="/">
    <input type="text" name="searchString" value="{escape(search or '')}" />
    <button type="submit">Search</button> <a href="/">Clear</a>
  </form>
  <p><a href="/students/create">Create new</a></p>
  <table>
    <tr><th>Id</th><th>Name</th><th>Email</th><th>Phone</th><th>Date of Birth</th><th></th></tr>
{rows}  </table>
"""
    return _page("Students", body)


def render_form(title: str, action: str, form: StudentForm, errors: List[FieldError]) -> str:
    hidden_id = f'    <input type="hidden" name="id" value="{escape(str(form.id))}" />\n' if form.id is not None else ""
    body = (
        _form_errors(errors)
        + f'  <form method="post" action="{escape(action)}">\n'
        + hidden_id
        + _field("Name", "name", form.name, errors)
        + _field("Email", "email", form.email, errors)
        + _field("Phone", "phone", form.phone, errors)
        + _field("Date of Birth", "dateOfBirth", form.date_of_birth, errors, kind="date")
        + '    <button type="submit">Save</button> <a href="/">Back to list</a>\n'
        + "  </form>\n"
    )
    return _page(title, body)


def render_delete(form: StudentForm, errors: List[FieldError]) -> str:
    body = (
        _form_errors(errors)
        + '  <div class="card">\n'
        + "    <p>Are you sure you want to delete this student?</p>\n"
        + f"    <dl><dt>Name</dt><dd>{escape(form.name)}</dd>"
        + f"<dt>Email</dt><dd>{escape(form.email)}</dd>"
        + f"<dt>Phone</dt><dd>{escape(form.phone)}</dd>"
        + f"<dt>Date of Birth</dt><dd>{escape(form.date_of_birth)}</dd></dl>\n"
        + f'    <form method="post" action="/students/{escape(str(form.id))}/delete">'
        + '<button type="submit">Delete</button> <a href="/">Back to list</a></form>\n'
        + "  </div>\n"
    )
    return _page("Delete student", body)


def render_error(status_code: int, message: str) -> str:
    body = (
        f'  <p class="error">{escape(message)}</p>\n'
        f"  <p>Status: {status_code}</p>\n"
        '  <p><a href="/">Back to list</a></p>\n'
    )
    return _page("Error", body)
