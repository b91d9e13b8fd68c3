from flask import abort
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request


def require_jwt(*claims: str):
    """Endpoint middleware: verify the bearer token and attach its claims.

    Sets data.extra['jwt'] and data.extra['identity']; aborts 403 when any of
    `claims` is missing from the token.
    """
    def middleware(data):
        verify_jwt_in_request()
        token = get_jwt()
        missing = [c for c in claims if c not in token]
        if missing:
            abort(403, description='Missing claim: ' + ', '.join(missing))
        data.extra['jwt'] = token
        data.extra['identity'] = get_jwt_identity()
        return None
    return middleware
