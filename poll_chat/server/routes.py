from sanic import Sanic, Request

from . import views
from .errors import ChatError
from .helpers import error_response


def register_routes(app: Sanic) -> None:
    @app.post("/chat/users")
    async def register_user_route(request: Request):
        return await views.register_user(request, app)

    @app.get("/chat/users")
    async def list_users_route(request: Request):
        return await views.list_users(request, app)

    @app.route("/chat/users/<username:str>/heartbeat", methods=["PUT"], unquote=True)
    async def heartbeat_route(request: Request, username: str):
        return await views.heartbeat(request, app, username)

    @app.route("/chat/users/<username:str>", methods=["DELETE"], unquote=True)
    async def unregister_user_route(request: Request, username: str):
        return await views.unregister_user(request, app, username)

    @app.post("/chat/messages")
    async def post_message_route(request: Request):
        return await views.post_message(request, app)

    @app.get("/chat/messages")
    async def fetch_messages_route(request: Request):
        return await views.fetch_messages(request, app)

    @app.get("/health")
    async def health_route(request: Request):
        return await views.health(request, app)

    @app.exception(ChatError)
    async def chat_error_handler(request: Request, exception: ChatError):
        return error_response(exception)
