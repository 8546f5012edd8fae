"""
Writes must be committed before the response starts, so a client acting on
a 201 straight away (logging in, listing) always sees its own write.
"""
import asyncio
import json

from sqlalchemy import func, select

from app.main import app
from app.models import CaseReport, User
from conftest import CASE_PAYLOAD


async def call_asgi(method: str, path: str, body: dict, on_response_start, headers: dict = None) -> dict:
    """Drive the ASGI app directly, running ``on_response_start`` when the status line is sent."""
    payload = json.dumps(body).encode()
    raw_headers = [
        (b"host", b"test"),
        (b"content-type", b"application/json"),
        (b"content-length", str(len(payload)).encode()),
    ]
    raw_headers += [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "root_path": "",
        "query_string": b"",
        "headers": raw_headers,
        "server": ("test", 80),
        "client": ("127.0.0.1", 50000),
    }
    finished = asyncio.Event()
    sent_body = False
    result = {"body": b""}

    async def receive():
        nonlocal sent_body
        if not sent_body:
            sent_body = True
            return {"type": "http.request", "body": payload, "more_body": False}
        await finished.wait()
        return {"type": "http.disconnect"}

    async def send(message):
        if message["type"] == "http.response.start":
            result["status"] = message["status"]
            result["seen_at_start"] = await on_response_start()
        elif message["type"] == "http.response.body":
            result["body"] += message.get("body", b"")
            if not message.get("more_body", False):
                finished.set()

    await app(scope, receive, send)
    result["json"] = json.loads(result["body"])
    return result


async def test_signup_committed_before_response(client, session_factory):
    async def account_count():
        async with session_factory() as session:
            return await session.scalar(select(func.count(User.id)).where(User.email == "asha@test.org"))

    result = await call_asgi(
        "POST",
        "/api/auth/signup",
        {"name": "Asha", "email": "asha@test.org", "password": "pw12345"},
        account_count,
    )

    assert result["status"] == 201
    assert result["seen_at_start"] == 1


async def test_case_committed_before_response(client, session_factory, auth_headers):
    async def case_count():
        async with session_factory() as session:
            return await session.scalar(select(func.count(CaseReport.id)))

    result = await call_asgi("POST", "/api/cases", CASE_PAYLOAD, case_count, headers=auth_headers)

    assert result["status"] == 201
    assert result["seen_at_start"] == 1
    assert result["json"]["case"]["patientName"] == CASE_PAYLOAD["patientName"]


async def test_login_right_after_signup(client):
    signup = await client.post(
        "/api/auth/signup",
        json={"name": "Asha", "email": "asha@test.org", "password": "pw12345"},
    )
    login = await client.post("/api/auth/login", json={"email": "asha@test.org", "password": "pw12345"})

    assert signup.status_code == 201
    assert login.status_code == 200
