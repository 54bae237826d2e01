"""Application service (use case) for support tickets.

Every change to a ticket leaves an entry in ``ticket_history``; chat
messages live in ``ticket_chat`` and assignees in ``ticket_assignments``.
"""

import logging
from collections import Counter

from opsdesk.application.interfaces import DataService
from opsdesk.application.listing.profiles import TICKETS
from opsdesk.application.schemas.ticket import TicketCreate, TicketStats
from opsdesk.application.services.listing_service import ListingService
from opsdesk.application.services.write_guard import WriteGuard, compensating
from opsdesk.domain.entities import Record, TicketStatus
from opsdesk.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_QUEUE = "Operations"


class TicketService(ListingService):
    """Orchestrates ticket intake, workflow, conversation and assignment."""

    profile = TICKETS

    def __init__(
        self,
        data_service: DataService,
        guard: WriteGuard | None = None,
        actor: str = "Admin",
    ):
        super().__init__(data_service, guard)
        self._actor = actor

    async def _log(self, ticket_id: str, action: str) -> Record:
        return await self._data.insert(
            "ticket_history",
            {"ticket_id": ticket_id, "user_name": self._actor, "action": action},
        )

    async def _employee_names(self, employee_ids: list[str]) -> str:
        employees = await self._data.select_in("employees", "id", employee_ids)
        names = {e["id"]: e.get("full_name") or e["id"] for e in employees}
        return ", ".join(names.get(employee_id, employee_id) for employee_id in employee_ids)

    # ── Intake ───────────────────────────────────────────────────────

    async def create(self, data: TicketCreate) -> Record:
        """Open a ticket with the next ticket number in the default queue."""
        latest = await self._data.max_value("tickets", "ticket_number")
        ticket_number = int(latest or 0) + 1

        async with compensating(f"Create ticket #{ticket_number}") as undo:
            row = await self._data.insert(
                "tickets",
                {
                    "ticket_number": ticket_number,
                    "client_name": data.client_name,
                    "client_email": data.client_email,
                    "company": data.company,
                    "issue": data.issue,
                    "priority": data.priority.value,
                    "status": TicketStatus.NEW.value,
                    "assigned_to": DEFAULT_QUEUE,
                },
            )
            ticket_id = row["id"]
            undo.add(f"delete ticket {ticket_id}", lambda: self._data.delete("tickets", ticket_id))
            await self._log(ticket_id, f"Ticket created via {self._actor} Portal.")

        logger.info("Opened ticket #%d (%s)", ticket_number, ticket_id)
        return await self.get(ticket_id)

    # ── Workflow ─────────────────────────────────────────────────────

    async def update_status(self, ticket_id: str, status: TicketStatus | str) -> Record:
        await self._write_board_value(ticket_id, TicketStatus(status).value)
        return await self.get(ticket_id)

    async def _write_board_value(self, ticket_id: str, status: str) -> None:
        async with self._guard.hold("tickets", ticket_id):
            row = await self._require(ticket_id)
            previous = row.get("status")
            await self._data.update("tickets", ticket_id, {"status": status})
            await self._log(ticket_id, f"Ticket status changed from {previous} to {status}.")

    async def send_chat(self, ticket_id: str, message: str) -> Record:
        text = (message or "").strip()
        if not text:
            raise ValidationError("Message cannot be empty", field="message")
        await self._require(ticket_id)
        chat = await self._data.insert(
            "ticket_chat",
            {
                "ticket_id": ticket_id,
                "user_name": self._actor,
                "message": text,
                "sender_type": "sent",
            },
        )
        await self._log(ticket_id, f"{self._actor} sent a chat message.")
        return chat

    async def assign(self, ticket_id: str, employee_ids: list[str]) -> Record:
        """Replace the ticket's assignees; the old set is restored if the insert fails."""
        employee_ids = list(dict.fromkeys(employee_ids))
        async with self._guard.hold("tickets", ticket_id):
            await self._require(ticket_id)
            previous = await self._data.select_in("ticket_assignments", "ticket_id", [ticket_id])

            async with compensating(f"Assign ticket {ticket_id}") as undo:
                await self._data.delete_where("ticket_assignments", "ticket_id", [ticket_id])
                if previous:
                    undo.add(
                        "restore previous assignees",
                        lambda: self._data.insert_many("ticket_assignments", previous),
                    )
                if employee_ids:
                    await self._data.insert_many(
                        "ticket_assignments",
                        [
                            {"ticket_id": ticket_id, "employee_id": e, "assigned_by": self._actor}
                            for e in employee_ids
                        ],
                    )
                    names = await self._employee_names(employee_ids)
                    await self._log(ticket_id, f"Ticket assigned to: {names}")
                else:
                    await self._log(ticket_id, "Ticket unassigned.")
        return await self.get(ticket_id)

    async def share(self, ticket_id: str, employee_ids: list[str]) -> Record:
        """Add assignees without removing existing ones."""
        employee_ids = list(dict.fromkeys(employee_ids))
        if not employee_ids:
            raise ValidationError("Select at least one employee to share with", field="employee_ids")
        async with self._guard.hold("tickets", ticket_id):
            await self._require(ticket_id)
            current = await self._data.select_in("ticket_assignments", "ticket_id", [ticket_id])
            already = {row.get("employee_id") for row in current}
            added = [e for e in employee_ids if e not in already]
            if added:
                await self._data.insert_many(
                    "ticket_assignments",
                    [
                        {"ticket_id": ticket_id, "employee_id": e, "assigned_by": self._actor}
                        for e in added
                    ],
                )
            await self._log(ticket_id, f"Ticket shared with {len(added)} employee(s).")
        return await self.get(ticket_id)

    async def delete(self, ticket_id: str) -> bool:
        """Delete a ticket after its history, chat and assignments."""
        async with self._guard.hold("tickets", ticket_id):
            await self._require(ticket_id)
            for table in ("ticket_history", "ticket_chat", "ticket_assignments"):
                await self._data.delete_where(table, "ticket_id", [ticket_id])
            deleted = await self._data.delete("tickets", ticket_id)
        logger.info("Deleted ticket %s", ticket_id)
        return deleted

    # ── Reads ────────────────────────────────────────────────────────

    async def details(self, ticket_id: str) -> tuple[Record, list[Record], list[Record]]:
        """The ticket with its history and chat, both oldest first."""
        ticket = await self.get(ticket_id)
        history = await self._data.select_in(
            "ticket_history", "ticket_id", [ticket_id], order_by="created_at"
        )
        chat = await self._data.select_in(
            "ticket_chat", "ticket_id", [ticket_id], order_by="created_at"
        )
        return ticket, history, chat

    async def stats(self) -> TicketStats:
        result = await self._store.load()
        counts = Counter(record.get("status") for record in result.records)
        return TicketStats(
            total=len(result.records),
            new=counts[TicketStatus.NEW.value],
            in_progress=counts[TicketStatus.IN_PROGRESS.value],
            escalated=counts[TicketStatus.ESCALATED.value],
            resolved=counts[TicketStatus.RESOLVED.value],
        )
