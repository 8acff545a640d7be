from multidict import CIMultiDictProxy


def is_preflight(method: str, headers: CIMultiDictProxy) -> bool:
    # a bare OPTIONS request is handled as an actual request
    return method.upper() == "OPTIONS" and bool(headers.get("Access-Control-Request-Method"))
