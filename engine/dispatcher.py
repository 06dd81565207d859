"""
Action execution for matched workflow rules.

Handlers are looked up in an explicit ``ActionKind`` map. Kinds without a
handler (currently send_email, update_record and create_related_record) are
reported by ``unhandled_kinds`` and skipped with a warning when a rule uses
them. Each action runs inside its own try block so one failure never stops
the rest of the list.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping

from db.notes import NotesStore
from models import Action, ActionKind, WorkflowRule
from sms.phone import is_valid_iran_mobile, normalize_phone
from sms.transport import SmsTransport

from .coercion import as_list, stringify
from .templates import render_template

logger = logging.getLogger("workflow_actions")

Record = Mapping[str, Any]
ActionHandler = Callable[[Action, str, Record], None]

FALLBACK_PHONE_FIELDS = ("mobile_1", "mobile_2", "phone")


def _phones(values: List[Any]) -> List[str]:
    return [phone for phone in (normalize_phone(value) for value in values) if phone]


def collect_sms_recipients(config: Mapping[str, Any], record: Record) -> List[str]:
    """
    Recipients named by ``recipient_fields`` plus ``manual_numbers``. The
    record's own mobile/phone fields are used only when neither yields a
    number. Duplicates and numbers that are not valid mobiles are dropped.
    """
    from_fields = _phones([record.get(str(key)) for key in as_list(config.get("recipient_fields"))])
    manual = _phones(as_list(config.get("manual_numbers")))
    fallback: List[str] = []
    if not from_fields and not manual:
        fallback = _phones([record.get(key) for key in FALLBACK_PHONE_FIELDS])

    recipients: List[str] = []
    for phone in from_fields + manual + fallback:
        if phone not in recipients and is_valid_iran_mobile(phone):
            recipients.append(phone)
    return recipients


class ActionDispatcher:
    def __init__(self, notes_store: NotesStore, sms_transport: SmsTransport) -> None:
        self.notes_store = notes_store
        self.sms_transport = sms_transport
        self._handlers: Dict[ActionKind, ActionHandler] = {
            ActionKind.SEND_NOTE: self._send_note,
            ActionKind.SEND_SMS: self._send_sms,
        }

    def registered_kinds(self) -> List[ActionKind]:
        return list(self._handlers)

    def unhandled_kinds(self) -> List[ActionKind]:
        return [kind for kind in ActionKind if kind not in self._handlers]

    def register(self, kind: ActionKind, handler: ActionHandler) -> None:
        self._handlers[ActionKind(kind)] = handler

    def execute(self, action: Action, module_id: str, record: Record) -> None:
        """Run one action. Errors propagate to the caller."""
        handler = self._handlers.get(action.type)
        if handler is None:
            logger.warning("No handler registered for workflow action type %s; skipping", action.type.value)
            return
        handler(action, module_id, record)

    def dispatch(self, rule: WorkflowRule, module_id: str, record: Record) -> None:
        """Run a rule's actions in order, logging and discarding each action's failure."""
        for action in rule.actions:
            try:
                self.execute(action, module_id, record)
            except Exception:
                logger.exception("Workflow action failed (%s / %s)", rule.label, action.type.value)

    def _send_note(self, action: Action, module_id: str, record: Record) -> None:
        text = render_template(action.config.get("note_text"), record).strip()
        if not text:
            return
        record_id = record.get("id")
        if not record_id:
            return
        self.notes_store.create_note(module_id, stringify(record_id), text)

    def _send_sms(self, action: Action, module_id: str, record: Record) -> None:
        text = render_template(action.config.get("message"), record).strip()
        if not text:
            return
        recipients = collect_sms_recipients(action.config, record)
        if not recipients:
            logger.info("No valid SMS recipients for %s record %s", module_id, record.get("id"))
            return
        for recipient in recipients:
            self.sms_transport.send([recipient], text)
