# src/fb_admin/application/service.py
"""Admin application service — ledger audit and FAAB export."""
import csv
import io
import logging
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.fb_common.cents import faab_to_units

logger = logging.getLogger(__name__)

_BALANCE_VS_LEDGER_SQL = text("""
    SELECT p.id AS participant_id, p.balance AS balance,
           COALESCE(SUM(t.amount), 0) AS ledger_sum
    FROM participants p
    LEFT JOIN ledger_transactions t ON t.participant_id = p.id
    GROUP BY p.id, p.balance
    HAVING p.balance <> COALESCE(SUM(t.amount), 0)
""")
_NEGATIVE_BALANCE_SQL = text(
    "SELECT id, balance FROM participants WHERE balance < 0"
)
_UNSETTLED_LEDGER_SQL = text("""
    SELECT w.id AS wager_id, w.status AS status, COUNT(t.id) AS settlements
    FROM wagers w
    LEFT JOIN ledger_transactions t
        ON t.wager_id = w.id AND t.reason IN ('BET_WON', 'BET_LOST', 'BET_PUSH')
    GROUP BY w.id, w.status
    HAVING (w.status = 'PENDING' AND COUNT(t.id) <> 0)
        OR (w.status <> 'PENDING' AND COUNT(t.id) <> 1)
""")
_FAAB_ADJUSTMENTS_SQL = text("""
    SELECT p.id AS participant_id, p.display_name AS display_name,
           COALESCE(SUM(w.payout), 0) - SUM(w.stake) AS adjustment,
           COUNT(w.id) AS settled_bets
    FROM wagers w
    JOIN participants p ON p.id = w.participant_id
    WHERE w.week = :week AND w.status <> 'PENDING'
    GROUP BY p.id, p.display_name
    ORDER BY p.id
""")

FAAB_CSV_HEADER = ["Participant ID", "Display Name", "FAAB Adjustment", "Notes"]


class AdminService:
    async def verify_ledger_invariants(self, db: AsyncSession) -> dict[str, Any]:
        """Balance equals ledger sum, no negative balance, one settlement entry per settled wager."""
        violations: list[str] = []
        for row in (await db.execute(_BALANCE_VS_LEDGER_SQL)).fetchall():
            violations.append(
                f"Balance mismatch for {row.participant_id}: "
                f"balance={row.balance} ledger_sum={row.ledger_sum}"
            )
        for row in (await db.execute(_NEGATIVE_BALANCE_SQL)).fetchall():
            violations.append(f"Negative balance for {row.id}: {row.balance}")
        for row in (await db.execute(_UNSETTLED_LEDGER_SQL)).fetchall():
            violations.append(
                f"Wager {row.wager_id} ({row.status}) has "
                f"{row.settlements} settlement transactions"
            )
        for msg in violations:
            logger.error("Ledger invariant violated: %s", msg)
        return {"ok": len(violations) == 0, "violations": violations}

    async def faab_adjustments(self, db: AsyncSession, week: int) -> list[dict[str, Any]]:
        rows = (await db.execute(_FAAB_ADJUSTMENTS_SQL, {"week": week})).fetchall()
        return [
            {
                "participant_id": row.participant_id,
                "display_name": row.display_name,
                "adjustment": int(row.adjustment),
                "settled_bets": int(row.settled_bets),
            }
            for row in rows
        ]

    async def faab_adjustments_csv(self, db: AsyncSession, week: int) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(FAAB_CSV_HEADER)
        for adj in await self.faab_adjustments(db, week):
            writer.writerow(
                [
                    adj["participant_id"],
                    adj["display_name"],
                    faab_to_units(adj["adjustment"]),
                    f"Week {week} betting: {adj['settled_bets']} settled",
                ]
            )
        return buf.getvalue()
