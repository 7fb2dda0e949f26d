"""RedisLineBoard — published betting lines, keyed by matchup id.

Key layout:
  fb:line:{matchup_id}  -> JSON BettingLine (latest generation wins)
  fb:week:{week}        -> SET of matchup ids published for that week

A week is republished in one MULTI/EXEC so readers never see half a board.
Matchups dropped by a republish lose their line key in the same block; a
line is only served while its matchup id is in its week's set.
"""

import json

import redis.asyncio as aioredis

from src.fb_odds.domain.models import BettingLine

_LINE_KEY = "fb:line:{matchup_id}"
_WEEK_KEY = "fb:week:{week}"


class RedisLineBoard:
    def __init__(self, client: aioredis.Redis) -> None:
        self._redis = client

    async def publish(self, week: int, lines: list[BettingLine]) -> None:
        week_key = _WEEK_KEY.format(week=week)
        new_ids = {line.matchup_id for line in lines}
        dropped = await self._stale_line_keys(week, new_ids)

        async with self._redis.pipeline(transaction=True) as pipe:
            pipe.delete(week_key, *dropped)
            for line in lines:
                pipe.set(
                    _LINE_KEY.format(matchup_id=line.matchup_id),
                    json.dumps(line.to_dict()),
                )
            if lines:
                pipe.sadd(week_key, *new_ids)
            await pipe.execute()

    async def _stale_line_keys(self, week: int, keep: set[str]) -> list[str]:
        """Line keys of this week's previous board that the new board leaves out."""
        old_ids = sorted(await self._redis.smembers(_WEEK_KEY.format(week=week)) - keep)
        if not old_ids:
            return []
        keys = [_LINE_KEY.format(matchup_id=mid) for mid in old_ids]
        raws = await self._redis.mget(keys)
        # A key already overwritten by another week's line belongs to that week now
        return [
            key
            for key, raw in zip(keys, raws)
            if raw is not None and json.loads(raw)["week"] == week
        ]

    async def get_line(self, matchup_id: str) -> BettingLine | None:
        raw = await self._redis.get(_LINE_KEY.format(matchup_id=matchup_id))
        if raw is None:
            return None
        line = BettingLine.from_dict(json.loads(raw))
        if not await self._redis.sismember(_WEEK_KEY.format(week=line.week), matchup_id):
            return None
        return line

    async def list_week(self, week: int) -> list[BettingLine]:
        matchup_ids = sorted(await self._redis.smembers(_WEEK_KEY.format(week=week)))
        if not matchup_ids:
            return []
        raws = await self._redis.mget(
            [_LINE_KEY.format(matchup_id=mid) for mid in matchup_ids]
        )
        lines = [BettingLine.from_dict(json.loads(raw)) for raw in raws if raw is not None]
        # A matchup id can be reused by a later week; only keep this week's lines.
        return [line for line in lines if line.week == week]
