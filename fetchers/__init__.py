# fetchers/__init__.py
from typing import Any, Dict

from . import hpoi

ROUTES: Dict[str, Dict[str, Any]] = {
    "hpoi/user": hpoi.ROUTE,
}


def get_route(name: str) -> Dict[str, Any]:
    try:
        return ROUTES[name]
    except KeyError:
        raise KeyError(f"No route registered for {name!r}") from None
