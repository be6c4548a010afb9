"""FastAPI web application for DepPrep."""

from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from core.config import get_settings
from core.errors import ParseError, UnsupportedGrammarError
from core.file_preparer import FilePreparer
from core.log import configure_logging, get_logger
from core.models import Dependency, ManifestFile
from core.syntax import available_grammars

configure_logging()
logger = get_logger("depprep.web")

app = FastAPI(
    title="DepPrep",
    description="Prepare Bundler dependency files for an update check",
    version="0.1.0",
)


class DependencyPayload(BaseModel):
    """The dependency being update-checked."""
    name: str
    version: Optional[str] = None


class FilePayload(BaseModel):
    """A dependency file as sent by the client."""
    name: str
    content: str
    directory: str = "/"


class PreparedFilePayload(FilePayload):
    changed: bool = False


class PrepareRequest(BaseModel):
    """Request model for preparing dependency files."""
    dependency: DependencyPayload
    files: list[FilePayload]
    remove_git_source: bool = False
    replacement_git_pin: Optional[str] = None


class PrepareResponse(BaseModel):
    """Response model for prepared dependency files."""
    files: list[PreparedFilePayload]
    has_changes: bool


@app.get("/api/health")
async def health():
    """Report service status and the grammars it can parse."""
    return {"status": "ok", "grammars": available_grammars()}


@app.post("/api/prepare", response_model=PrepareResponse)
async def prepare_files(request: PrepareRequest):
    """Prepare dependency files for an update check."""
    try:
        if not request.files:
            raise HTTPException(status_code=400, detail="No files provided")

        settings = get_settings()
        originals = [
            ManifestFile(name=f.name, content=f.content, directory=f.directory)
            for f in request.files
        ]
        preparer = FilePreparer(
            originals,
            Dependency(name=request.dependency.name, version=request.dependency.version),
            remove_git_source=request.remove_git_source,
            replacement_git_pin=request.replacement_git_pin,
            grammar=settings.grammar,
            placeholder_version=settings.placeholder_version,
        )
        prepared = preparer.prepared_dependency_files()

        before = {(f.directory, f.name): f.content for f in originals}
        files = [
            PreparedFilePayload(
                name=f.name,
                directory=f.directory,
                content=f.content,
                changed=before.get((f.directory, f.name)) != f.content,
            )
            for f in prepared
        ]

        return PrepareResponse(files=files, has_changes=any(f.changed for f in files))

    except HTTPException:
        # Re-raise HTTP exceptions (don't convert to 500)
        raise
    except ParseError as e:
        raise HTTPException(status_code=422, detail=f"Could not parse dependency file: {e}")
    except UnsupportedGrammarError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Preparing %s failed", request.dependency.name)
        raise HTTPException(status_code=500, detail=f"Error preparing dependency files: {str(e)}")
