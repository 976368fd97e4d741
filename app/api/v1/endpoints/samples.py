from typing import Dict

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from app.services.sample_data import generate_sample_files

router = APIRouter()


@router.get("")
async def list_samples() -> Dict[str, str]:
    """All sample files keyed by file name."""
    return generate_sample_files()


@router.get("/{name}", response_class=PlainTextResponse)
async def get_sample(name: str) -> str:
    """Raw contents of one sample file, ready to upload back."""
    samples = generate_sample_files()
    if name not in samples:
        raise HTTPException(status_code=404, detail=f"Unknown sample file: {name}")
    return samples[name]
