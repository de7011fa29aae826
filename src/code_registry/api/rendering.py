"""
HTML rendering of the message code listing.

Pure functions of the ordered code list; all user text is escaped.
"""

from html import escape

from code_registry.core.models import MessageCode

SITE_NAME = "Message Code Registry"

_STYLE = """\
.submit {width:80px}
.deleted * {color:#CCC}
.deleted .undelete {color:#000}
.title {font-weight:bold}
.title input {font-weight:bold;width:300px}
.description input {width:300px}
"""


def _page(title: str, body: str) -> str:
    return (
        "<html>\n<head>\n"
        f"<title>{escape(title)} • {SITE_NAME}</title>\n"
        f"<style>\n{_STYLE}</style>\n"
        "</head>\n"
        f"<body><h1>{escape(title)}</h1>\n"
        f"{body}"
        "</body>\n</html>\n"
    )


def _audit_tooltip(code: MessageCode) -> str:
    modified_by = code.modified_ip if code.modified_ip is not None else "unknown"
    created_by = code.created_ip if code.created_ip is not None else "unknown"
    return (
        f"Modified: {code.modified_at.isoformat()} via {modified_by}\n"
        f"Created: {code.created_at.isoformat()} via {created_by}"
    )


def render_row(code: MessageCode) -> str:
    """Render the edit form row for one code."""
    if code.deleted:
        row_class, toggle_name, toggle_label = "deleted", "undelete", "Undelete"
    else:
        row_class, toggle_name, toggle_label = "", "delete", "Delete"

    return (
        "<form method='post' action='modify'>"
        f"<input type='hidden' name='id' value='{code.code}' />"
        f"<tr class='{row_class}' title='{escape(_audit_tooltip(code), quote=True)}'>"
        f"<td class='id'>{code.code}</td>"
        f"<td class='title'><input name='title' value='{escape(code.title, quote=True)}' /></td>"
        "<td class='description'>"
        f"<input name='description' value='{escape(code.description, quote=True)}' /></td>"
        "<td><input class='submit' type='submit' name='save' value='Save' /> "
        f"<input class='submit {toggle_name}' type='submit' name='{toggle_name}' "
        f"value='{toggle_label}' /></td>"
        "</tr></form>\n"
    )


def render_listing(codes: list[MessageCode]) -> str:
    """Render the full listing page with the add row first."""
    parts = [
        "<table>\n",
        "<tr><th>ID</th><th>Title</th><th>Description</th><th>Actions</th></tr>\n",
        "<form method='post' action='add'><tr class='add'><td class='id'>NEW</td>"
        "<td class='title'><input id='startfocus' name='title' /></td>"
        "<td class='description'><input name='description' /></td>"
        "<td><input class='submit' type='submit' name='save' value='Save' /></td>"
        "</tr></form>\n",
        "<script>document.getElementById('startfocus').focus()</script>\n",
    ]
    parts.extend(render_row(code) for code in codes)
    parts.append("</table>\n")
    return _page("Message Code List", "".join(parts))
