from datetime import datetime, timezone
from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from support_intel.core.db import get_db
from support_intel.core.tables import SqlTableReader, TableReader
from support_intel.services.assembler import build_response

router = APIRouter(prefix="/api", tags=["Support Intel"])

def get_table_reader(db: Session = Depends(get_db)) -> TableReader:
    return SqlTableReader(db)

def get_now() -> datetime:
    return datetime.now(timezone.utc)

@router.get("")
def get_report(
    action: Optional[str] = Query(None, description="getDashboard, getTrends, getQualityData, getMetrics or getKB"),
    reader: TableReader = Depends(get_table_reader),
    now: datetime = Depends(get_now),
) -> Dict[str, Any]:
    """
    Build the report payload named by `action` from a fresh table snapshot.
    Failures come back as {"error": ...} with HTTP 200; callers check the payload shape.
    """
    return build_response(action, reader, now=now)
