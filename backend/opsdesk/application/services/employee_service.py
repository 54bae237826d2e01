"""Application service (use case) for employees and teams."""

import logging

from opsdesk.application.listing.profiles import EMPLOYEES
from opsdesk.application.schemas.employee import EmployeeCreate, EmployeeUpdate, TeamCreate
from opsdesk.application.services.listing_service import ListingService, changes_from
from opsdesk.domain.entities import Record
from opsdesk.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

_REQUIRED = ("full_name", "status")


class EmployeeService(ListingService):
    """Orchestrates the employee directory. Depends on the DataService port (DI)."""

    profile = EMPLOYEES

    async def create(self, data: EmployeeCreate) -> Record:
        row = await self._data.insert("employees", data.model_dump(mode="json"))
        logger.info("Created employee %s (%s)", row["id"], row["full_name"])
        return await self.get(row["id"])

    async def update(self, employee_id: str, data: EmployeeUpdate) -> Record:
        changes = changes_from(data, required=_REQUIRED)
        if changes.get("reporting_manager_id") == employee_id:
            raise ValidationError("An employee cannot report to themselves", field="reporting_manager_id")
        async with self._guard.hold("employees", employee_id):
            await self._require(employee_id)
            await self._data.update("employees", employee_id, changes)
        return await self.get(employee_id)

    async def delete(self, employee_id: str) -> bool:
        """Delete an employee together with their assignments and subscription seats."""
        async with self._guard.hold("employees", employee_id):
            await self._require(employee_id)
            await self._data.delete_where("document_assignments", "employee_id", [employee_id])
            await self._data.delete_where("ticket_assignments", "employee_id", [employee_id])
            await self._data.delete_where("subscription_users", "user_id", [employee_id])
            deleted = await self._data.delete("employees", employee_id)
        logger.info("Deleted employee %s", employee_id)
        return deleted

    # ── Teams ────────────────────────────────────────────────────────

    async def list_teams(self) -> list[Record]:
        return await self._data.fetch_all("teams", order_by="team_name")

    async def create_team(self, data: TeamCreate) -> Record:
        name = data.team_name.strip()
        if not name:
            raise ValidationError("Team name is required", field="team_name")
        existing = await self._data.select_in("teams", "team_name", [name])
        if existing:
            raise ValidationError(f"Team '{name}' already exists", field="team_name")
        return await self._data.insert("teams", {"team_name": name, "description": data.description})
