"""FastAPI dependencies for session gating.

Admin endpoints depend on the session gate being authenticated.
"""

from fastapi import HTTPException, Request

from hotel_admin_console.services.session_gate import SessionGate


def require_authenticated_session(request: Request) -> SessionGate:
    """FastAPI dependency rejecting requests while the session gate is anonymous.

    Args:
        request: Incoming request; the gate is read from ``app.state.session_gate``

    Returns:
        SessionGate: The authenticated gate

    Raises:
        HTTPException: 401 if no admin session is open
    """
    gate: SessionGate = request.app.state.session_gate
    if not gate.is_authenticated:
        raise HTTPException(status_code=401, detail="Admin login required")

    return gate
