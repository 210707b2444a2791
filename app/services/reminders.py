from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional
import logging

from sqlalchemy.orm import Session

from app.models.exam import Exam
from app.models.deadline import Deadline
from app.models.reminder import Reminder, ReminderEntity
from app.models.subscription import PushSubscription
from app.services.push import PushService, DeliveryResult
from app.utils.clock import get_local_time, local_tz

logger = logging.getLogger(__name__)

APP_URL = "/"

@dataclass
class DispatchSummary:
    processed: int = 0
    sent: int = 0
    failed: int = 0
    pruned: int = 0

def resolve_labels(db: Session, reminders: List[Reminder]) -> Dict[str, Dict[int, str]]:
    """
    Join feito na aplicação: um lote por tipo de entidade.
    Retorna {entity_type: {entity_id: rótulo}}.
    """
    ids_by_type: Dict[str, set] = {ReminderEntity.EXAM.value: set(), ReminderEntity.DEADLINE.value: set()}
    for r in reminders:
        if r.entity_type in ids_by_type:
            ids_by_type[r.entity_type].add(r.entity_id)

    labels: Dict[str, Dict[int, str]] = {key: {} for key in ids_by_type}

    exam_ids = ids_by_type[ReminderEntity.EXAM.value]
    if exam_ids:
        rows = db.query(Exam.id, Exam.name).filter(Exam.id.in_(exam_ids)).all()
        labels[ReminderEntity.EXAM.value] = {row.id: row.name for row in rows}

    deadline_ids = ids_by_type[ReminderEntity.DEADLINE.value]
    if deadline_ids:
        rows = db.query(Deadline.id, Deadline.title).filter(Deadline.id.in_(deadline_ids)).all()
        labels[ReminderEntity.DEADLINE.value] = {row.id: row.title for row in rows}

    return labels

def build_payload(entity_type: str, label: Optional[str]) -> dict:
    """Monta o JSON {title, body, url} que o service worker exibe."""
    title = "Promemoria UniTracker"
    body = "Hai un promemoria in scadenza."

    if label:
        if entity_type == ReminderEntity.EXAM.value:
            title = "📚 Promemoria Esame"
            body = f"Non dimenticare l'esame: {label}"
        elif entity_type == ReminderEntity.DEADLINE.value:
            title = "💶 Scadenza in arrivo"
            body = f"Ricordati di: {label}"

    return {"title": title, "body": body, "url": APP_URL}

def fetch_due_reminders(db: Session, now: datetime) -> List[Reminder]:
    return db.query(Reminder).filter(
        Reminder.is_sent == False,
        Reminder.remind_at <= now
    ).order_by(Reminder.remind_at, Reminder.id).all()

@dataclass(frozen=True)
class PushTarget:
    """Cópia simples de uma inscrição: não expira com o commit."""
    endpoint: str
    auth: str
    p256dh: str

def load_push_targets(db: Session) -> List[PushTarget]:
    rows = db.query(
        PushSubscription.endpoint, PushSubscription.auth, PushSubscription.p256dh
    ).all()
    return [PushTarget(row.endpoint, row.auth, row.p256dh) for row in rows]

def prune_subscriptions(db: Session, endpoints: List[str]) -> int:
    # Por endpoint: se outra passada já removeu, não há erro
    return db.query(PushSubscription).filter(
        PushSubscription.endpoint.in_(endpoints)
    ).delete(synchronize_session=False)

def dispatch_due_reminders(db: Session, push_service: PushService, now: Optional[datetime] = None) -> DispatchSummary:
    """
    Uma passada completa: busca os lembretes vencidos, envia para todos os
    dispositivos e marca cada lembrete como enviado.
    Erros de banco sobem (a passada é abortada); erros de envio não.
    """
    now = now or get_local_time()
    summary = DispatchSummary()

    # --- 1. LEMBRETES VENCIDOS ---
    reminders = fetch_due_reminders(db, now)
    if not reminders:
        return summary

    logger.info(f"⏰ {len(reminders)} lembrete(s) vencido(s)")

    # --- 2. RÓTULOS (um lote por tipo) ---
    labels = resolve_labels(db, reminders)

    # O commit de cada lembrete expira os objetos da sessão: o laço usa cópias
    pending = [(r.id, r.entity_type, r.entity_id) for r in reminders]

    # --- 3. INSCRIÇÕES (carrega uma vez só) ---
    targets = load_push_targets(db)

    # --- 4. ENVIO ---
    for reminder_id, entity_type, entity_id in pending:
        label = labels.get(entity_type, {}).get(entity_id)
        payload = build_payload(entity_type, label)

        gone = []
        for target in targets:
            result = push_service.send(target, payload)
            if result == DeliveryResult.DELIVERED:
                summary.sent += 1
            else:
                summary.failed += 1
                if result == DeliveryResult.GONE:
                    gone.append(target)

        # Inscrições expiradas saem do banco e do resto da passada
        if gone:
            prune_subscriptions(db, [t.endpoint for t in gone])
            targets = [t for t in targets if t not in gone]
            summary.pruned += len(gone)

        # Todos os dispositivos foram tentados: marca como enviado
        db.query(Reminder).filter(Reminder.id == reminder_id).update(
            {Reminder.is_sent: True}, synchronize_session=False
        )
        db.commit()
        summary.processed += 1

    logger.info(
        f"✅ Lembretes: {summary.processed} processados, {summary.sent} entregues, "
        f"{summary.failed} falhas, {summary.pruned} inscrições removidas"
    )
    return summary

def delete_entity_reminders(db: Session, entity_type: ReminderEntity, entity_id: int) -> int:
    """Sem FK, então a remoção em cascata é feita aqui."""
    return db.query(Reminder).filter(
        Reminder.entity_type == entity_type.value,
        Reminder.entity_id == entity_id
    ).delete(synchronize_session=False)

def add_entity_reminders(db: Session, entity_type: ReminderEntity, entity_id: int, dates: List[datetime]) -> List[Reminder]:
    reminders = [
        Reminder(entity_type=entity_type.value, entity_id=entity_id, remind_at=to_local_naive(d), is_sent=False)
        for d in dates
    ]
    db.add_all(reminders)
    return reminders

def to_local_naive(dt: datetime) -> datetime:
    """Datas com fuso viram horário local sem fuso, como o banco guarda."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(local_tz()).replace(tzinfo=None)
