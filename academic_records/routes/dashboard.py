from fastapi import APIRouter, Depends, HTTPException, Response

from ..auth.dependencies import get_current_user, require_staff
from ..database import get_store
from ..schemas.core import DashboardStats
from ..services.reports import REPORTS, build_report
from ..storage.base import Storage

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/dashboard/stats", response_model=DashboardStats)
def dashboard_stats(
    _: dict = Depends(get_current_user),
    store: Storage = Depends(get_store),
):
    return store.get_dashboard_stats()


@router.get("/reports/{kind}.xlsx")
def download_report(
    kind: str,
    _: dict = Depends(require_staff),
    store: Storage = Depends(get_store),
):
    if kind not in REPORTS:
        raise HTTPException(status_code=404, detail="Unknown report")
    content = build_report(store, kind)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{kind}_report.xlsx"'},
    )
