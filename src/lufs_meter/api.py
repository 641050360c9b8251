"""FastAPI interface for lufs-meter."""

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from pydantic import ValidationError

from .audio_contract import UnsupportedAudioFormatError
from .interfaces.api_handlers import AudioDecodeError, meter_uploaded_bytes

app = FastAPI(title="lufs-meter API", version="0.1.0")

# Patch point for tests.
meter_bytes = meter_uploaded_bytes


@app.get("/health")
def health() -> dict[str, str]:
    """Health check endpoint."""

    return {"status": "ok"}


@app.post("/analyze")
async def analyze(
    file: UploadFile = File(..., description="Audio file to meter"),
    block_size: int | None = Query(None, ge=1, description="Samples per analyzer block."),
    include_series: bool = Query(True, description="Return every measurement, not only the last."),
    reference_lufs: bool = Query(False, description="Also compute BS.1770 integrated loudness."),
) -> dict:
    """Replay an uploaded file through the meter and return its readings."""

    payload = await file.read()
    try:
        report = meter_bytes(
            payload,
            file.filename,
            file.content_type,
            block_size=block_size,
            with_reference=reference_lufs,
        )
    except UnsupportedAudioFormatError as error:
        raise HTTPException(
            status_code=415, detail={"code": "unsupported_format", "message": str(error)}
        ) from error
    except ValidationError as error:
        raise HTTPException(
            status_code=400, detail={"code": "invalid_settings", "message": str(error)}
        ) from error
    except AudioDecodeError as error:
        raise HTTPException(
            status_code=400, detail={"code": "invalid_payload", "message": str(error)}
        ) from error

    return report.to_dict(include_series=include_series)
