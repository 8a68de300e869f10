"""Case-insensitive matching of the collection segment in request paths."""

from starlette.types import ASGIApp, Receive, Scope, Send


class CollectionCaseMiddleware:
    """Rewrite any casing of ``collection`` as the first path segment to its canonical form.

    ``/books/1`` and ``/BOOKS/1`` reach the router as ``/Books/1``.
    """

    def __init__(self, app: ASGIApp, collection: str = "Books") -> None:
        self.app = app
        self.collection = collection

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            head, sep, rest = scope["path"][1:].partition("/")
            if head != self.collection and head.lower() == self.collection.lower():
                path = f"/{self.collection}{sep}{rest}"
                scope = {**scope, "path": path, "raw_path": path.encode()}
        await self.app(scope, receive, send)
