def session_cookie_value(response) -> str:
    """auth_token value from the response's Set-Cookie header"""
    name, _, value = response.headers["set-cookie"].split(";")[0].partition("=")
    assert name == "auth_token"
    return value


def session_cookie_header(token: str) -> dict:
    return {"Cookie": f"auth_token={token}"}
