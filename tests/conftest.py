"""Pytest fixtures for feed extraction tests."""

import pytest

ENTRY = """
<div class="collect-hobby-list-small">
  <a class="name" href="{href}">{name}</a>
  <img src="{src}">
  <span class="pay">{pay}</span>
  <span class="score">{score}</span>
</div>
"""


def make_page(entries, owner="测试用户"):
    body = "".join(ENTRY.format(**e) for e in entries)
    head = ""
    if owner is not None:
        head = (
            '<div class="hpoi-collect-head"><div class="info">'
            f"<p>{owner}</p><p>second paragraph</p>"
            "</div></div>"
        )
    return f"<html><body>{head}<div class='list'>{body}</div></body></html>"


@pytest.fixture
def entries():
    return [
        {
            "href": "hobby/10001",
            "name": "初音未来 1/7",
            "src": "https://r.hpoi.net/gk/cover/s/2023/01/aaa.jpg",
            "pay": "¥1,280",
            "score": "9.5",
        },
        {
            "href": "hobby/10002",
            "name": "阿尔托莉雅",
            "src": "https://r.hpoi.net/gk/cover/s/2023/02/bbb.jpg",
            "pay": "¥980",
            "score": "8.0",
        },
        {
            "href": "hobby/10003",
            "name": "雷姆",
            "src": "https://r.hpoi.net/gk/cover/s/2023/03/ccc.jpg",
            "pay": "¥1,500",
            "score": "7.5",
        },
    ]


@pytest.fixture
def page(entries):
    return make_page(entries)


@pytest.fixture
def page_factory():
    return make_page
