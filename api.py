"""
FastAPI REST API for the CSV Structure Profiler

Provides endpoints for:
- File structure analysis (upload)
- Ad-hoc value classification
- Configuration presets
"""

from fastapi import FastAPI, File, UploadFile, HTTPException, Query
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
import io
from datetime import datetime
import logging
import time

from csvprofile import __version__
from csvprofile.config import ConfigLoader, ConfigValidator, get_default_config, unescape_delimiter
from csvprofile.errors import ConfigError, ProfilerError
from csvprofile.inference import classify_value
from csvprofile.report import json_safe
from csvprofile.scanner import FileScanner, build_report
from csvprofile.utils import setup_logging

# Configure logging
setup_logging(level=logging.INFO)
logger = logging.getLogger("csvprofile.api")

app = FastAPI(
    title="CSV Structure Profiler API",
    description="Infer structure, header rows and field types of delimited text",
    version=__version__
)


class ClassifyRequest(BaseModel):
    """Values to classify"""
    values: List[Optional[str]] = Field(..., description="Raw field values")


class ClassifyResult(BaseModel):
    """Classification results, one per value"""
    assertions: List[Dict[str, Any]]


@app.get("/", tags=["General"])
async def root():
    """API root endpoint"""
    return {
        "name": "CSV Structure Profiler API",
        "version": __version__,
        "status": "running",
        "endpoints": {
            "analyze": "/analyze",
            "classify": "/classify",
            "presets": "/presets",
        }
    }


@app.get("/health", tags=["General"])
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
    }


@app.post("/analyze", tags=["Analysis"])
async def analyze_file(
    file: UploadFile = File(...),
    delimiter: Optional[str] = Query(None, description="Field delimiter (\\t for tabs)"),
    window: Optional[int] = Query(None, ge=1, description="Rows inspected for header detection"),
    preset: Optional[str] = Query(None, description="Configuration preset"),
    include_details: bool = Query(True, description="Include per-field type details"),
):
    """
    Profile an uploaded delimited file

    Returns field-count frequencies, the header verdict and the type profile
    of the sampled row
    """
    try:
        config = ConfigLoader().load_preset(preset) if preset else get_default_config()
    except ConfigError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if delimiter:
        config.scan.delimiter = unescape_delimiter(delimiter)
    if window is not None:
        config.scan.header_window = window

    is_valid, errors = ConfigValidator.validate(config)
    if not is_valid:
        raise HTTPException(status_code=400, detail="; ".join(errors))

    raw = await file.read()
    try:
        text = raw.decode(config.scan.encoding)
    except UnicodeDecodeError as e:
        logger.error(f"Upload is not valid {config.scan.encoding}: {e}")
        raise HTTPException(status_code=400, detail=f"File is not valid {config.scan.encoding}")

    started_at = datetime.now()
    start = time.perf_counter()
    try:
        summary = FileScanner(config.scan).scan_lines(io.StringIO(text, newline=''))
    except ProfilerError as e:
        logger.error(f"Analysis error: {e}")
        raise HTTPException(status_code=422, detail=e.to_dict())

    report = build_report(
        summary,
        path=file.filename or "upload",
        started_at=started_at,
        finished_at=datetime.now(),
        elapsed_seconds=time.perf_counter() - start,
    )
    return json_safe(report.to_dict(include_details=include_details))


@app.post("/classify", response_model=ClassifyResult, tags=["Analysis"])
async def classify_values(request: ClassifyRequest):
    """
    Classify raw values
    """
    return ClassifyResult(
        assertions=[json_safe(classify_value(value).to_dict()) for value in request.values]
    )


@app.get("/presets", tags=["Configuration"])
async def list_presets():
    """
    List available configuration presets
    """
    loader = ConfigLoader()
    presets = loader.list_presets()

    return {
        "presets": presets,
        "count": len(presets)
    }


@app.get("/presets/{preset_name}", tags=["Configuration"])
async def get_preset(preset_name: str):
    """
    Get a configuration preset
    """
    try:
        loader = ConfigLoader()
        config = loader.load_preset(preset_name)

        return {
            "preset_name": preset_name,
            "config": config.to_dict()
        }

    except ConfigError as e:
        raise HTTPException(status_code=404, detail=str(e))


# Run with: uvicorn api:app --reload
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
