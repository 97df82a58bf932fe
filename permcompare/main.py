import logging
from types import MappingProxyType

from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile

from .compare import DescriptionTable, compare_names
from .config import Settings, get_settings
from .descriptions import DescriptionLoadError, load_descriptions, load_descriptions_bytes
from .extract import extract_names
from .models import (
    CompareRequest,
    CompareResponse,
    DescriptionsResponse,
    HealthResponse,
    SanitizeRequest,
    SanitizeResponse,
)
from .rules import EMPTY_RESULT_DETAIL, EMPTY_RESULT_TITLE

logger = logging.getLogger(__name__)
logging.basicConfig(level=get_settings().log_level, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
logging.getLogger("permcompare").setLevel(get_settings().log_level)

app = FastAPI(
    title="permission-set-comparator",
    description="Find permission sets a mirror user has that the primary user lacks",
    version="0.1.0",
)


def get_descriptions(request: Request, settings: Settings = Depends(get_settings)) -> DescriptionTable:
    state = request.app.state
    table = getattr(state, "descriptions", None)
    if table is None:
        try:
            table = load_descriptions(settings.descriptions_path)
            state.descriptions_source = settings.descriptions_path
        except DescriptionLoadError as e:
            logger.warning("No permission set descriptions loaded: %s", e)
            table = MappingProxyType({})
            state.descriptions_source = None
        state.descriptions = table
    return table


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/sanitize", response_model=SanitizeResponse)
def sanitize(body: SanitizeRequest):
    names = extract_names(body.text)
    return {"text": "\n".join(names), "names": names}


@app.post("/compare", response_model=CompareResponse)
def compare_permissions(body: CompareRequest, descriptions: DescriptionTable = Depends(get_descriptions)):
    primary = extract_names(body.primary_text)
    mirror = extract_names(body.mirror_text)
    rows = compare_names(primary, mirror, descriptions)

    message = None
    if not rows:
        message = {"title": EMPTY_RESULT_TITLE, "detail": EMPTY_RESULT_DETAIL}

    return {
        "rows": [row._asdict() for row in rows],
        "summary": {
            "primary": len(primary),
            "mirror": len(mirror),
            "missing": len(rows),
            "described": sum(1 for row in rows if row.description),
        },
        "message": message,
    }


@app.get("/descriptions", response_model=DescriptionsResponse)
def describe_table(request: Request, descriptions: DescriptionTable = Depends(get_descriptions)):
    return {
        "entries": len(descriptions),
        "source": getattr(request.app.state, "descriptions_source", None),
    }


@app.post("/descriptions", response_model=DescriptionsResponse)
async def upload_descriptions(request: Request, file: UploadFile = File(...)):
    if not (file.filename or "").lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    raw = await file.read()
    loaded = load_descriptions_bytes(raw)

    request.app.state.descriptions = loaded["table"]
    request.app.state.descriptions_source = file.filename
    return {
        "entries": len(loaded["table"]),
        "source": file.filename,
        "sha256": loaded["sha256"],
        "encoding": loaded["encoding"],
        "warnings": loaded["warnings"],
    }
