from fastapi import Request

UNKNOWN_CLIENT = "unknown"


def client_ip(request: Request) -> str:
    """Identify the caller for rate limiting (respects X-Forwarded-For, X-Real-IP)."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT
