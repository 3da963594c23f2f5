"""Server-rendered HTML for the reference page.

Cards expand and collapse through links: each card header points at the
same page with that endpoint id toggled in the ``expanded`` parameters.
"""

from dataclasses import replace
from html import escape
from urllib.parse import urlencode

from api_reference.catalog.base import ApiCategory, ApiEndpoint, CatalogInfo
from api_reference.search import count_endpoints
from api_reference.view.state import HEADER_OFFSET, ViewState

METHOD_COLORS = {
    "GET": "#3b82f6",
    "POST": "#16a34a",
    "PUT": "#f59e0b",
    "DELETE": "#dc2626",
    "HL7 v2.x": "#9333ea",
    "SOAP": "#4f46e5",
}
DEFAULT_METHOD_COLOR = "#6b7280"

PAGE_CSS = """
    * { box-sizing: border-box; }
    body { margin: 0; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
           color: #111827; background: #fafafa; }
    a { color: inherit; text-decoration: none; }
    .layout { display: flex; min-height: 100vh; }
    .sidebar { width: 20rem; flex-shrink: 0; border-right: 1px solid #e5e7eb; background: #fff;
               position: sticky; top: 0; height: 100vh; overflow-y: auto; }
    .sidebar h2 { font-size: 1.1rem; margin: 0; padding: 24px 24px 4px; }
    .sidebar .version { font-size: 0.75rem; color: #6b7280; padding: 0 24px 16px;
                        border-bottom: 1px solid #e5e7eb; }
    .sidebar ul { list-style: none; margin: 0; padding: 8px 12px; }
    .sidebar li a { display: block; padding: 8px 12px; border-radius: 6px; font-size: 0.9rem; }
    .sidebar li a.active, .sidebar li a:hover { background: #f3f4f6; font-weight: 600; }
    .sidebar .updated { font-size: 0.75rem; color: #6b7280; padding: 16px 24px;
                        border-top: 1px solid #e5e7eb; }
    .main { flex: 1; min-width: 0; }
    .topbar { position: sticky; top: 0; z-index: 10; background: rgba(250,250,250,0.95);
              border-bottom: 1px solid #e5e7eb; padding: 16px 24px; }
    .topbar input[type=search] { width: 100%; max-width: 36rem; padding: 8px 14px;
                                 border: 1px solid #d1d5db; border-radius: 8px; font-size: 0.9rem; }
    .content { max-width: 72rem; margin: 0 auto; padding: 48px 24px; }
    h1 { font-size: 2.25rem; font-weight: 500; margin: 0 0 12px; }
    .subtitle { font-size: 1.1rem; color: #4b5563; margin: 0 0 8px; }
    .summary { font-size: 0.9rem; color: #6b7280; margin: 0 0 48px; }
    .banner { padding: 12px 16px; margin-bottom: 24px; background: #f3f4f6; border-radius: 6px;
              font-size: 0.9rem; color: #4b5563; }
    .empty { text-align: center; padding: 64px 24px; color: #6b7280; }
    .empty h3 { color: #111827; }
    .category-head { display: flex; align-items: center; gap: 12px; }
    .category-head .bar { width: 48px; height: 4px; border-radius: 2px; }
    .category-head h2 { font-size: 1.5rem; font-weight: 500; margin: 0; }
    .category-desc { font-size: 0.9rem; color: #6b7280; margin: 8px 0 24px 60px; }
    .card { background: #fff; border: 1px solid #e5e7eb; border-radius: 8px; margin-bottom: 16px;
            overflow: hidden; }
    .card-toggle { display: flex; align-items: center; gap: 16px; padding: 16px 24px; }
    .card-toggle:hover { background: #f9fafb; }
    .method { color: #fff; font-size: 0.75rem; font-weight: 600; text-transform: uppercase;
              padding: 6px 12px; border-radius: 6px; min-width: 80px; text-align: center;
              white-space: nowrap; }
    .card-text { flex: 1; min-width: 0; }
    .card-title { display: block; font-weight: 500; margin: 0 0 4px; }
    .path { display: block; font-family: ui-monospace, monospace; font-size: 0.85rem; color: #6b7280;
            overflow: hidden; text-overflow: ellipsis; white-space: nowrap; }
    .chevron { margin-left: auto; color: #6b7280; }
    .card-body { border-top: 1px solid #e5e7eb; padding: 16px 24px; font-size: 0.9rem; }
    .card-body .label { font-weight: 500; }
    .card-body ul { padding-left: 20px; color: #4b5563; }
    .exchange { display: grid; grid-template-columns: repeat(auto-fit, minmax(320px, 1fr)); gap: 16px; }
    pre { background: #18181b; color: #f4f4f5; padding: 16px; border-radius: 6px; overflow-x: auto;
          font-size: 0.75rem; line-height: 1.6; }
    .security { display: grid; grid-template-columns: repeat(auto-fit, minmax(280px, 1fr)); gap: 24px; }
    .security div { background: #fff; border: 1px solid #e5e7eb; border-radius: 8px; padding: 24px; }
    .security h3 { margin-top: 0; font-size: 1.05rem; }
    .security ul { padding-left: 18px; font-size: 0.9rem; color: #374151; }
    footer { margin-top: 64px; padding-top: 32px; border-top: 1px solid #e5e7eb;
             font-size: 0.85rem; color: #4b5563; }
    footer code { font-size: 0.75rem; color: #6b7280; }
"""
# Section anchors land below the sticky header.
PAGE_CSS += f"    section.category {{ margin-bottom: 48px; scroll-margin-top: {HEADER_OFFSET}px; }}\n"


def page_url(state: ViewState, fragment: str | None = None) -> str:
    """URL that reproduces this view state."""
    params = []
    if state.search_query:
        params.append(("q", state.search_query))
    params.extend(("expanded", eid) for eid in sorted(state.expanded))
    if state.active_category:
        params.append(("category", state.active_category))

    url = "/?" + urlencode(params) if params else "/"
    return f"{url}#{fragment}" if fragment else url


def toggle_url(state: ViewState, endpoint_id: str) -> str:
    next_state = replace(state, expanded=set(state.expanded))
    next_state.toggle_endpoint(endpoint_id)
    return page_url(next_state, fragment=f"endpoint-{endpoint_id}")


def category_url(state: ViewState, category_id: str) -> str:
    next_state = replace(state, expanded=set(state.expanded))
    next_state.select_category(category_id)
    return page_url(next_state, fragment=f"section-{category_id}")


def render_page(info: CatalogInfo, categories: list[ApiCategory], state: ViewState) -> str:
    visible = state.visible_categories(categories)

    if not visible and state.search_query:
        body = _render_empty(state.search_query)
    else:
        parts = []
        if state.search_query:
            parts.append(_render_banner(state.search_query, count_endpoints(visible)))
        parts.extend(_render_category(c, state) for c in visible)
        body = "\n".join(parts)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{escape(info.title)}</title>
<style>{PAGE_CSS}</style>
</head>
<body>
<div class="layout">
{_render_sidebar(info, categories, state)}
<div class="main">
<header class="topbar">
{_render_search_form(state)}
</header>
<main class="content">
<h1>{escape(info.title)}</h1>
<p class="subtitle">{escape(info.subtitle)}</p>
<p class="summary">{escape(info.summary)}</p>
{body}
{_render_security(info)}
{_render_footer(info)}
</main>
</div>
</div>
</body>
</html>
"""


def _render_sidebar(info: CatalogInfo, categories: list[ApiCategory], state: ViewState) -> str:
    items = []
    for category in categories:
        active = ' class="active" aria-current="true"' if category.id == state.active_category else ""
        items.append(
            f'<li><a href="{escape(category_url(state, category.id))}"{active}'
            f' data-category="{escape(category.id)}">{escape(category.name)}</a></li>'
        )
    links = "\n".join(items)
    return f"""<nav class="sidebar">
<h2>API Documentation</h2>
<div class="version">{escape(info.subtitle)}</div>
<ul>
{links}
</ul>
<div class="updated">Last Updated: {escape(info.last_updated)}</div>
</nav>"""


def _render_search_form(state: ViewState) -> str:
    hidden = "".join(
        f'<input type="hidden" name="expanded" value="{escape(eid)}">'
        for eid in sorted(state.expanded)
    )
    return (
        '<form method="get" action="/" role="search">'
        f'<input type="search" name="q" value="{escape(state.search_query)}"'
        ' placeholder="Search endpoints by name, method, or description..." aria-label="Search">'
        f"{hidden}</form>"
    )


def _render_banner(query: str, count: int) -> str:
    plural = "" if count == 1 else "s"
    return (
        f'<div class="banner">Found <strong>{count}</strong> endpoint{plural}'
        f" matching &quot;{escape(query)}&quot;</div>"
    )


def _render_empty(query: str) -> str:
    return f"""<div class="empty">
<h3>No endpoints found</h3>
<p>No API endpoints match your search for <strong>&quot;{escape(query)}&quot;</strong></p>
<p>Try adjusting your search terms or browse all categories</p>
</div>"""


def _render_category(category: ApiCategory, state: ViewState) -> str:
    cards = "\n".join(_render_card(ep, state) for ep in category.endpoints)
    return f"""<section class="category" id="section-{escape(category.id)}">
<div class="category-head"><span class="bar" style="background-color: {escape(category.color)}"></span>
<h2>{escape(category.name)}</h2></div>
<p class="category-desc">{escape(category.description)}</p>
{cards}
</section>"""


def _render_card(endpoint: ApiEndpoint, state: ViewState) -> str:
    expanded = state.is_expanded(endpoint.id)
    color = METHOD_COLORS.get(endpoint.method, DEFAULT_METHOD_COLOR)
    chevron = "&#9650;" if expanded else "&#9660;"
    aria = "true" if expanded else "false"

    header = (
        f'<a class="card-toggle" href="{escape(toggle_url(state, endpoint.id))}"'
        f' aria-expanded="{aria}">'
        f'<span class="method" style="background-color: {color}">{escape(endpoint.method)}</span>'
        f'<span class="card-text"><span class="card-title">{escape(endpoint.title)}</span>'
        f'<span class="path">{escape(endpoint.endpoint)}</span></span>'
        f'<span class="chevron">{chevron}</span></a>'
    )
    body = _render_card_body(endpoint) if expanded else ""
    return f'<div class="card" id="endpoint-{escape(endpoint.id)}">{header}{body}</div>'


def _render_card_body(endpoint: ApiEndpoint) -> str:
    params = ""
    if endpoint.search_params:
        items = "".join(f"<li>{escape(p)}</li>" for p in endpoint.search_params)
        params = f'<div><p class="label">Search Parameters</p><ul>{items}</ul></div>'

    return f"""<div class="card-body">
<p><span class="label">Category:</span> {escape(endpoint.category)}</p>
<p class="label">Description:</p>
<p>{escape(endpoint.description)}</p>
{params}
<div class="exchange">
<div><p class="label">Request</p><pre>{escape(endpoint.request)}</pre></div>
<div><p class="label">Response</p><pre>{escape(endpoint.response)}</pre></div>
</div>
</div>"""


def _render_security(info: CatalogInfo) -> str:
    if not info.security:
        return ""
    boxes = []
    for note in info.security:
        items = "".join(
            f"<li><strong>{escape(i.label)}:</strong> {escape(i.value)}</li>" for i in note.items
        )
        boxes.append(f"<div><h3>{escape(note.heading)}</h3><ul>{items}</ul></div>")
    grid = "".join(boxes)
    return f"""<section class="category" id="section-security">
<div class="category-head"><h2>Security &amp; Authentication</h2></div>
<div class="security">{grid}</div>
</section>"""


def _render_footer(info: CatalogInfo) -> str:
    roots = "".join(
        f"<li>{escape(r.label)}: <code>{escape(r.url)}</code></li>" for r in info.service_roots
    )
    return f"""<footer>
<p><strong>Document Version:</strong> {escape(info.version)}</p>
<p><strong>Service Root URLs:</strong></p>
<ul>{roots}</ul>
<p>All examples are representative and may require adjustment based on your specific implementation requirements.</p>
</footer>"""
