"""
Record upload API endpoints.
"""
import logging
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from typing import Any, Dict, List

from aadhaar_dashboard.schemas.common import (
    AppendRecordsResponse,
    UploadFileResult,
    UploadResponse,
)
from aadhaar_dashboard.schemas.records import Vertical
from aadhaar_dashboard.services.csv_ingestion import IngestionError, load_csv_text, records_from_rows
from aadhaar_dashboard.store import RecordStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/{vertical}/upload", response_model=UploadResponse)
async def upload_csv_files(
    vertical: Vertical,
    files: List[UploadFile] = File(...),
    store: RecordStore = Depends(get_store),
):
    """
    Upload one or more CSV extracts for a vertical.

    Each file is parsed independently; a file that fails to parse is
    reported in its own result and does not stop the rest of the batch.
    """
    if not files:
        raise HTTPException(status_code=400, detail="No files uploaded")

    results = []
    added = 0

    for upload in files:
        filename = upload.filename or "upload.csv"
        try:
            content = await upload.read()
            try:
                text = content.decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise IngestionError(f"{filename} is not UTF-8 text") from e
            records = await run_in_threadpool(load_csv_text, vertical, text, filename)
        except IngestionError as e:
            logger.error(f"Error processing {filename}: {e}")
            results.append(UploadFileResult(filename=filename, success=False, error=str(e)))
            continue

        store.append(vertical, records, source=filename)
        added += len(records)
        results.append(UploadFileResult(filename=filename, success=True, records=len(records)))

    return UploadResponse(
        vertical=vertical.value,
        files=results,
        records_added=added,
        total_records=store.count(vertical),
    )


@router.post("/{vertical}", response_model=AppendRecordsResponse)
def append_records(
    vertical: Vertical,
    rows: List[Dict[str, Any]],
    store: RecordStore = Depends(get_store),
):
    """
    Append records posted as JSON objects keyed by CSV column name.
    """
    records = records_from_rows(vertical, rows)
    store.append(vertical, records, source="api")
    return AppendRecordsResponse(
        vertical=vertical.value,
        records_added=len(records),
        total_records=store.count(vertical),
    )


@router.get("/counts")
def get_record_counts(store: RecordStore = Depends(get_store)):
    """Number of loaded records per vertical."""
    counts = store.snapshot().counts()
    return {**counts, "total": sum(counts.values())}


@router.get("/activity")
def get_activity_feed(store: RecordStore = Depends(get_store)):
    """Recent upload notices, newest first."""
    return {"activity": [notice.to_dict() for notice in store.activity()]}
