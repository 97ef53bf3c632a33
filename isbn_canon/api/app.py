from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from isbn_canon.adapters.factory import build_resolver
from isbn_canon.config import Settings, load_settings
from isbn_canon.core.checksum import isbn10_verify, isbn13_verify
from isbn_canon.core.convert import convert, same_isbn
from isbn_canon.core.digits import ISBN_10_RE, ISBN_13_RE, clean_code
from isbn_canon.core.errors import AmbiguousError, IsbnError, NotFoundError
from isbn_canon.core.models import Converted, Unsupported

app = FastAPI(title="ISBN Canonicalization API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache
def get_settings() -> Settings:
    return load_settings()


@lru_cache
def get_resolver():
    return build_resolver(get_settings())


def _status_for(error: IsbnError) -> int:
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, AmbiguousError):
        return 409
    return 400


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/normalize/{code}")
def normalize(code: str, resolver=Depends(get_resolver)):
    result = convert(clean_code(code), resolver=resolver)
    if isinstance(result, Converted):
        return {"input": code, "isbn13": result.isbn13, "checksum_ok": result.checksum_ok}
    if isinstance(result, Unsupported):
        raise HTTPException(status_code=422, detail=str(result.error))
    raise HTTPException(status_code=_status_for(result.error), detail=str(result.error))


@app.get("/verify/{isbn}")
def verify(isbn: str):
    cleaned = clean_code(isbn)
    if ISBN_10_RE.match(cleaned):
        return {"isbn": cleaned, "format": "isbn10", "valid": isbn10_verify(cleaned)}
    if ISBN_13_RE.match(cleaned):
        return {"isbn": cleaned, "format": "isbn13", "valid": isbn13_verify(cleaned)}
    raise HTTPException(status_code=400, detail=f"not an ISBN-10 or ISBN-13: {isbn}")


@app.get("/compare")
def compare(
    a: str = Query(..., min_length=1),
    b: str = Query(..., min_length=1),
    resolver=Depends(get_resolver),
):
    same = same_isbn(clean_code(a), clean_code(b), resolver=resolver)
    return {"a": a, "b": b, "same": same}
