"""Appointment calendar endpoints."""

import time
from datetime import date, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse, Response

from api.dependencies import get_appointment_fetcher, verify_api_key
from api.logging import RequestLog, log_request
from api.models.responses import (
    CalendarResponse,
    DayColumnResponse,
    ErrorCodes,
    EventBlockResponse,
    StatsResponse,
    WarningResponse,
)
from services.calendar import DayWindow
from services.loader import CalendarLoader, CalendarView, FetchAppointments
from services.reports import agenda_filename, create_agenda_workbook, workbook_to_bytes

router = APIRouter(prefix="/v1")

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def parse_anchor(date_str: str | None) -> date | None:
    """Parse anchor date string to date object."""
    if not date_str:
        return None
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid anchor format",
                "code": ErrorCodes.INVALID_REQUEST,
                "details": ["Expected format: YYYY-MM-DD"],
            },
        )


def build_calendar_response(view: CalendarView) -> CalendarResponse:
    columns = [
        DayColumnResponse(
            date=column.day.isoformat(),
            is_today=column.is_today,
            blocks=[
                EventBlockResponse(
                    id=block.event.id,
                    title=block.event.title,
                    start=block.event.start.isoformat(),
                    end=block.event.end.isoformat(),
                    color=block.event.color,
                    status=block.event.status,
                    category=block.event.category,
                    top=block.top,
                    height=block.height,
                )
                for block in column.blocks
            ],
        )
        for column in view.grid.columns
    ]

    return CalendarResponse(
        anchor=view.window.anchor.isoformat(),
        days=[d.isoformat() for d in view.window.days],
        hours=view.grid.hours,
        row_height=view.grid.row_height,
        total_height=view.grid.total_height,
        columns=columns,
        stats=StatsResponse(
            today=view.stats.today,
            week=view.stats.week,
            total=view.stats.total,
            confirmed=view.stats.confirmed,
        ),
        warnings=[WarningResponse(**w) for w in view.warnings],
        error=view.error,
    )


async def load_view(
    fetch: FetchAppointments,
    anchor: str | None,
    status_filter: str | None,
    client_id: str | None,
) -> CalendarView:
    window = DayWindow.current()
    parsed_anchor = parse_anchor(anchor)
    if parsed_anchor:
        window = DayWindow(parsed_anchor)

    loader = CalendarLoader(fetch, window=window, status=status_filter, client_id=client_id)
    await loader.load()
    return loader.view()


def _write_log(request_log: RequestLog):
    try:
        log_request(request_log)
    except Exception as e:
        # Don't fail the request if logging fails
        print(f"Request log not written: {e}")


@router.get("/calendar", response_model=CalendarResponse)
async def get_calendar(
    request: Request,
    anchor: Annotated[str | None, Query(description="First day of the window (YYYY-MM-DD)")] = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    client_id: Annotated[str | None, Query()] = None,
    fetch: FetchAppointments = Depends(get_appointment_fetcher),
    _api_key: str = Depends(verify_api_key),
):
    """
    Lay out one week of appointments.

    A failed fetch still returns the calendar shape, with an error message
    and no blocks, under status 502.
    """
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/v1/calendar",
        method="GET",
        client_ip=get_client_ip(request),
        anchor=anchor,
        status_filter=status_filter,
    )

    try:
        view = await load_view(fetch, anchor, status_filter, client_id)
        body = build_calendar_response(view)
        request_log.events_returned = view.grid.block_count
        for warning in view.warnings:
            request_log.details.append(("warning", f"{warning['id']}: {warning['message']}"))

        if view.error:
            request_log.status_code = 502
            request_log.error_code = ErrorCodes.UPSTREAM_ERROR
            request_log.error_message = view.error
            return JSONResponse(status_code=502, content=body.model_dump())

        request_log.status_code = 200
        return body

    except HTTPException as e:
        request_log.status_code = e.status_code
        if isinstance(e.detail, dict):
            request_log.error_code = e.detail.get("code")
            request_log.error_message = e.detail.get("error")
        else:
            request_log.error_message = str(e.detail)
        raise

    finally:
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        _write_log(request_log)


@router.get("/calendar/export")
async def export_calendar(
    request: Request,
    anchor: Annotated[str | None, Query(description="First day of the window (YYYY-MM-DD)")] = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    client_id: Annotated[str | None, Query()] = None,
    fetch: FetchAppointments = Depends(get_appointment_fetcher),
    _api_key: str = Depends(verify_api_key),
):
    """Download the week as an Excel agenda."""
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/v1/calendar/export",
        method="GET",
        client_ip=get_client_ip(request),
        anchor=anchor,
        status_filter=status_filter,
    )

    try:
        view = await load_view(fetch, anchor, status_filter, client_id)
        if view.error:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail={
                    "error": "Erro ao carregar agendamentos",
                    "code": ErrorCodes.UPSTREAM_ERROR,
                    "details": [view.error],
                },
            )

        wb = create_agenda_workbook(view.window.days, view.grid.hours, view.events, view.stats)
        request_log.status_code = 200
        request_log.events_returned = view.grid.block_count

        return Response(
            content=workbook_to_bytes(wb),
            media_type=XLSX_MEDIA_TYPE,
            headers={
                "Content-Disposition": f'attachment; filename="{agenda_filename(view.window.anchor)}"'
            },
        )

    except HTTPException as e:
        request_log.status_code = e.status_code
        if isinstance(e.detail, dict):
            request_log.error_code = e.detail.get("code")
            request_log.error_message = e.detail.get("error")
            for detail in e.detail.get("details", []):
                request_log.details.append(("upstream_error", detail))
        raise

    finally:
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        _write_log(request_log)
