from fastapi import HTTPException, Request, status

from zktracker.services.tracker import TrackerController


def get_tracker(request: Request) -> TrackerController:
    tracker = getattr(request.app.state, "tracker", None)
    if tracker is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Tracker not initialized")
    return tracker
