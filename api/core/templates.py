"""Jinja2 template engine shared across page routes.

Route files import the module-level ``templates`` instance directly instead
of reaching through ``request.app.state``.  Price helpers from ``rendering``
are registered here so every page formats prices the same way.
"""

from pathlib import Path

from fastapi.templating import Jinja2Templates

from rendering.pricing import assignment_price_label, format_price, unit_label

_templates_dir = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(_templates_dir))

templates.env.filters["price"] = format_price
templates.env.filters["unit_label"] = unit_label
templates.env.globals["assignment_price"] = assignment_price_label
