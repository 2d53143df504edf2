# core/render.py
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

# Shipped as package data inside core/
TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    keep_trailing_newline=False,
)


def build_item_description(image_url: str, price: str, score: str) -> str:
    template = env.get_template("item_description.html")
    return template.render(image_url=image_url, price=price, score=score)
