"""Static asset serving with single-page-app fallback to index.html."""

from starlette.exceptions import HTTPException
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

API_PREFIX = "api"


class SpaStaticFiles(StaticFiles):
    """Serve files from the public directory; unknown non-API paths get index.html."""

    async def get_response(self, path: str, scope: Scope):
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404 or path == API_PREFIX or path.startswith(API_PREFIX + "/"):
                raise
            return await super().get_response("index.html", scope)
