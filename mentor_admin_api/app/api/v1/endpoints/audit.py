"""
Audit log endpoints for API v1.

Gives administrators read access to the audit trail of mentor
deletions and mentor removals from tasks.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from mentor_admin_api.app.core.security import require_admin
from mentor_admin_api.app.schemas.audit import AuditLogRead
from mentor_admin_api.app.services.audit_service import AuditService

router = APIRouter()


@router.get("/logs", response_model=List[AuditLogRead])
async def list_audit_logs(
    user_id: Optional[int] = Query(None, description="Filter by acting user ID"),
    object_type: Optional[str] = Query(None, description="Filter by object type (mentor, task_mentor)"),
    object_id: Optional[int] = Query(None, description="Filter by affected object ID"),
    action: Optional[str] = Query(None, description="Filter by action (delete, detach)"),
    limit: int = Query(100, ge=1, le=500, description="Maximum number of logs to return"),
    offset: int = Query(0, ge=0, description="Number of logs to skip"),
    current_user: Dict[str, Any] = Depends(require_admin),
) -> List[AuditLogRead]:
    """Retrieve audit logs, newest first."""
    return await AuditService.list_logs(
        user_id=user_id,
        object_type=object_type,
        object_id=object_id,
        action=action,
        limit=limit,
        offset=offset,
    )
