from pathlib import Path

from fastapi.templating import Jinja2Templates

from babybook.core.text import format_date

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["fmt_date"] = format_date
