"""FastAPI application for the gemsec pattern scanner."""

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .config import TOOL_NAME
from .engine import RuleEvaluationError
from .models import AnalysisResponse, AnalyzeDirectoryRequest, AnalyzeFileRequest
from .service import analyze_directory_tool, analyze_file_tool, get_security_best_practices

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=TOOL_NAME,
    description="Static pattern scanner for JavaScript/TypeScript security issues",
    version="1.0.0",
)

# CORS - allow common development origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:3000",
        "http://localhost:3030",
    ],
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "name": TOOL_NAME}


@app.get("/best-practices")
async def best_practices():
    """Security best practices for Next.js/React applications."""
    return {"text": get_security_best_practices()}


@app.post("/analyze/file", response_model=AnalysisResponse)
def analyze_file(request: AnalyzeFileRequest) -> AnalysisResponse:
    """
    Analyze a single file.

    - **file_path**: path used for reporting (and for reading when no content is sent)
    - **file_content**: optional file content
    """
    try:
        return analyze_file_tool(request.file_path, request.file_content)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RuleEvaluationError as e:
        logger.error(f"Rule failure: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.error(f"File analysis failed: {e}")
        raise HTTPException(status_code=500, detail=f"Analysis failed: {str(e)}")


@app.post("/analyze/directory", response_model=AnalysisResponse)
def analyze_directory(request: AnalyzeDirectoryRequest) -> AnalysisResponse:
    """
    Analyze every JavaScript/TypeScript file in a directory.

    - **directory_path**: directory used for reporting (and walked when no files are sent)
    - **files**: optional list of {path, content}
    """
    try:
        return analyze_directory_tool(request.directory_path, request.files)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RuleEvaluationError as e:
        logger.error(f"Rule failure: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.error(f"Directory analysis failed: {e}")
        raise HTTPException(status_code=500, detail=f"Analysis failed: {str(e)}")
