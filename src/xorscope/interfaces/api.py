"""
FastAPI REST API Interface
Programmatic access to the xorscope engine for automation and integration
"""

from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from .. import __version__
from ..core.config import AnalysisConfig
from ..core.engine import XorscopeEngine
from ..core.errors import XorscopeError
from ..utils.encoding import decode_input, decode_lines


class CiphertextRequest(BaseModel):
    """Encoded ciphertext plus how it is encoded"""
    ciphertext: str = Field(..., description="Encoded ciphertext")
    encoding: str = Field("hex", description="hex, base64 or raw")


class RepeatingKeyRequest(CiphertextRequest):
    key_length: Optional[int] = Field(None, ge=1, description="Known key length (skips estimation)")
    preset: Optional[str] = Field(None, description="Analysis preset name")


class KeyLengthRequest(CiphertextRequest):
    preset: Optional[str] = Field(None, description="Analysis preset name")


class ECBRequest(BaseModel):
    ciphertexts: List[str] = Field(..., description="Encoded ciphertexts, one per entry")
    encoding: str = Field("hex", description="hex, base64 or raw")
    block_size: int = Field(16, ge=1, description="Cipher block size in bytes")


# Initialize FastAPI app
app = FastAPI(
    title="xorscope API",
    description="Statistical cryptanalysis of XOR ciphers and ECB mode",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Initialize engine (singleton, built from the bundled English corpus)
engine = XorscopeEngine.from_corpus()


def _engine_for(preset: Optional[str]) -> XorscopeEngine:
    if not preset:
        return engine
    return XorscopeEngine(engine.table, AnalysisConfig.from_preset(preset))


@app.get("/health")
def health_check():
    """
    Health check endpoint for monitoring
    """
    return {
        "status": "healthy",
        "service": "xorscope-api",
        "version": __version__
    }


@app.post("/single-byte")
def single_byte(request: CiphertextRequest):
    """
    Break single-byte XOR; multi-line input returns the line that was XORed
    """
    try:
        ciphertexts = decode_lines(request.ciphertext, request.encoding)
        if len(ciphertexts) > 1:
            return engine.find_single_byte_ciphertext(ciphertexts).to_dict()
        if not ciphertexts:
            raise HTTPException(status_code=400, detail="Empty ciphertext")
        return {"candidates": [r.to_dict() for r in engine.break_single_byte(ciphertexts[0])]}

    except XorscopeError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/key-length")
def key_length(request: KeyLengthRequest):
    """
    Rank repeating-key XOR key lengths
    """
    try:
        ciphertext = decode_input(request.ciphertext, request.encoding)
        candidates = _engine_for(request.preset).rank_key_lengths(ciphertext)
        return {"candidates": [c.to_dict() for c in candidates]}

    except XorscopeError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/repeating-key")
def repeating_key(request: RepeatingKeyRequest):
    """
    Break repeating-key XOR
    """
    try:
        ciphertext = decode_input(request.ciphertext, request.encoding)
        result = _engine_for(request.preset).break_repeating_key(ciphertext, request.key_length)
        return result.to_dict()

    except XorscopeError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/detect-ecb")
def detect_ecb(request: ECBRequest):
    """
    Flag ciphertexts with repeated blocks
    """
    try:
        config = AnalysisConfig(block_size=request.block_size)
        ciphertexts = [decode_input(c, request.encoding) for c in request.ciphertexts]
        scans = XorscopeEngine(engine.table, config).scan_ecb(ciphertexts)
        return {"results": [s.to_dict() for s in scans]}

    except XorscopeError as e:
        raise HTTPException(status_code=400, detail=str(e))


def main():
    """Run the API with uvicorn"""
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)


if __name__ == "__main__":
    main()
