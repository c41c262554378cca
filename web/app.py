"""
Extension Verifier - Web Interface
FastAPI backend: upload an extension package, get the verification result
"""

import sys
from pathlib import Path

# Get project root directory
PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Add src directory to path for imports
sys.path.insert(0, str(PROJECT_ROOT / 'src'))

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
import uvicorn

from models import VerificationResult
from verifier import ExtensionVerifier

app = FastAPI(
    title="Extension Store Compliance Verifier",
    description="Check packaged browser extensions against Chrome Web Store policy",
    version="0.1.0"
)

# Templates
templates = Jinja2Templates(directory=PROJECT_ROOT / "web" / "templates")

verifier = ExtensionVerifier()


@app.get("/", response_class=HTMLResponse)
async def home(request: Request):
    """Render the upload form"""
    return templates.TemplateResponse(request, "index.html", {"title": app.title})


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/verify", response_model=VerificationResult)
async def verify_extension(file: UploadFile = File(...)):
    """Verify an uploaded .zip / .crx package"""
    data = await file.read()

    if not data:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    # Verification is CPU-bound; keep it off the event loop
    return await run_in_threadpool(verifier.verify_bytes, data)


if __name__ == "__main__":
    print("\n" + "=" * 50)
    print("Extension Store Compliance Verifier - Web Interface")
    print("=" * 50)
    print(f"\nProject root: {PROJECT_ROOT}")
    print("\nStarting server at http://localhost:8000\n")

    uvicorn.run(app, host="0.0.0.0", port=8000)
