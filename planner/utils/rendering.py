"""
Jinja2 environment for the HTML pages the service renders
"""

import os
import jinja2

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")

# Guest-supplied text is always escaped
env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(TEMPLATES_DIR),
    autoescape=jinja2.select_autoescape(["html", "xml"])
)

def dash(value) -> str:
    """Placeholder for missing optional fields"""
    if value is None:
        return "-"
    text = str(value).strip()
    return text if text else "-"

env.filters["dash"] = dash

def render_template(name: str, **context) -> str:
    return env.get_template(name).render(**context)
