def merge_vary(current: str | None, token: str) -> str:
    """
    Add `token` to a Vary header value without duplicating it.

    A `*` member already covers every request header, so the result is `*`.
    """
    if not current or not current.strip():
        return token
    members = [member.strip() for member in current.split(",")]
    if "*" in members:
        return "*"
    if token in members:
        return current
    return f"{current}, {token}"
