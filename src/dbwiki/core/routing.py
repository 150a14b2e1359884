"""Path allow-list and title extraction."""

import re
from enum import Enum
from typing import Callable, NamedTuple

from fastapi import HTTPException, Request, status

VALID_PATH = re.compile(r"/(edit|save|view)/([a-zA-Z0-9]+)")


class Action(str, Enum):
    VIEW = "view"
    EDIT = "edit"
    SAVE = "save"


class Route(NamedTuple):
    action: Action
    title: str


def resolve(path: str) -> Route | None:
    """Match a request path against the allow-list.

    Returns the action and page title, or None if the path is not one the
    wiki serves.
    """
    match = VALID_PATH.fullmatch(path)
    if match is None:
        return None
    return Route(Action(match.group(1)), match.group(2))


def route_title(action: Action) -> Callable[[Request], str]:
    """Build a dependency yielding the page title for one action.

    Raises a 404 before the handler runs when the request path does not
    resolve to ``action``.
    """

    def dependency(request: Request) -> str:
        # request.url.path drops tabs and newlines; the decoded scope path keeps them.
        route = resolve(request.scope["path"])
        if route is None or route.action is not action:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return route.title

    return dependency


TITLE_DEPENDENCIES = {action: route_title(action) for action in Action}
