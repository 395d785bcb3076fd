from fastapi import APIRouter, HTTPException

from ..config import ProjectionSettings, load_settings, save_settings

router = APIRouter()


@router.get("/", response_model=ProjectionSettings)
def get_settings():
    """Get the projection defaults."""
    return load_settings()


@router.put("/", response_model=ProjectionSettings)
def update_settings(settings: ProjectionSettings):
    """Replace the projection defaults."""
    if settings.max_horizon_months < 1:
        raise HTTPException(status_code=422, detail="Maximum horizon must be at least 1 month")
    if not 1 <= settings.default_horizon_months <= settings.max_horizon_months:
        raise HTTPException(
            status_code=422,
            detail=f"Default horizon must be between 1 and {settings.max_horizon_months} months",
        )
    save_settings(settings)
    return settings
