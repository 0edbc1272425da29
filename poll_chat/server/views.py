from sanic import Sanic, Request
from sanic.response import HTTPResponse, json as json_response

from .helpers import get_body, get_since, utcnow


async def register_user(request: Request, app: Sanic) -> HTTPResponse:
    body = get_body(request)
    user = await app.ctx.chat_service.register(body.get("username"))
    return json_response(user.to_dict(), status=201)


async def list_users(request: Request, app: Sanic) -> HTTPResponse:
    users = await app.ctx.chat_service.list_users()
    return json_response([u.to_dict() for u in users])


async def heartbeat(request: Request, app: Sanic, username: str) -> HTTPResponse:
    return json_response(await app.ctx.chat_service.heartbeat(username))


async def unregister_user(request: Request, app: Sanic, username: str) -> HTTPResponse:
    return json_response(await app.ctx.chat_service.unregister(username))


async def post_message(request: Request, app: Sanic) -> HTTPResponse:
    body = get_body(request)
    message = await app.ctx.chat_service.post_message(
        body.get("sender"), body.get("content")
    )
    return json_response(message.to_dict(), status=201)


async def fetch_messages(request: Request, app: Sanic) -> HTTPResponse:
    messages = await app.ctx.chat_service.fetch_messages(get_since(request))
    return json_response([m.to_dict() for m in messages])


async def health(request: Request, app: Sanic) -> HTTPResponse:
    return json_response(
        {
            "status": "ok",
            "messages": await app.ctx.chat_state.message_count(),
            "users": await app.ctx.chat_state.user_count(),
            "timestamp": utcnow().isoformat(),
        }
    )
