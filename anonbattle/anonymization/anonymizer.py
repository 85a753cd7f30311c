"""Battle log anonymizer with per-run pseudonyms.

Processing flow for one log:
1. Parse the JSON document and pull out the fields we rewrite.
2. Resolve pseudonyms for both players and the winner via the registry.
3. Rewrite player fields, null ratings and room id, truncate the timestamp.
4. Rewrite the input log (player setup lines, drop chat).
5. Rewrite the battle log (drop chat and timers, replace names).
6. Serialize and check that no player name or userid survived.
"""

from __future__ import annotations

import json
import re
from typing import Any, ClassVar

from anonbattle.anonymization.base import BaseAnonymizer
from anonbattle.anonymization.exceptions import (
    AnonymizationError,
    LeakDetectedError,
    ParseError,
    SchemaError,
)
from anonbattle.anonymization.identifier import to_id
from anonbattle.anonymization.models import PlayerIdentity
from anonbattle.anonymization.registry import PseudonymRegistry
from anonbattle.logging.logger import Log


class Anonymizer(BaseAnonymizer):
    """Replaces player names with sequential pseudonyms and strips chat.

    Pseudonyms come from a registry shared by every log this instance sees,
    so a player keeps the same number across a whole run.
    """

    _STRING_FIELDS: ClassVar[tuple[str, ...]] = ("p1", "p2", "winner", "timestamp")
    _LIST_FIELDS: ClassVar[tuple[str, ...]] = ("inputLog", "log")
    _NULLED_FIELDS: ClassVar[tuple[str, ...]] = ("p1rating", "p2rating", "roomid")

    # Matches a JSON string value, so escaped quotes inside a name are kept whole.
    _INPUTLOG_NAME_RE: ClassVar[re.Pattern[str]] = re.compile(
        r'name":"(?:[^"\\]|\\.)*",'
    )

    _DROPPED_LOG_PREFIXES: ClassVar[tuple[str, ...]] = ("|c|", "|c:|", "|inactive|")
    _NAMED_LOG_PREFIXES: ClassVar[tuple[str, ...]] = (
        "|j|",
        "|J|",
        "|l|",
        "|L|",
        "|N|",
        "|n|",
        "|win|",
        "|tie|",
        "|-message|",
        "|raw|",
        "|player|",
    )

    def __init__(
        self,
        registry: PseudonymRegistry | None = None,
        strict_mode: bool = False,
    ) -> None:
        self._registry = registry if registry is not None else PseudonymRegistry()
        self._strict_mode = strict_mode
        self._battle_number = 0

    @property
    def registry(self) -> PseudonymRegistry:
        return self._registry

    @property
    def battle_number(self) -> int:
        """Number of logs anonymized so far by this instance."""
        return self._battle_number

    @property
    def strict_mode(self) -> bool:
        return self._strict_mode

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def anonymize(self, raw: str) -> tuple[str, int]:
        try:
            return self._run(raw)
        except AnonymizationError:
            raise
        except Exception as exc:
            raise AnonymizationError(f"Anonymization failed: {exc}") from exc

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _run(self, raw: str) -> tuple[str, int]:
        battle = self._parse(raw)

        p1_name = battle["p1"]
        p2_name = battle["p2"]
        p1 = PlayerIdentity(p1_name, to_id(p1_name), self._registry.assign_or_get(p1_name))
        p2 = PlayerIdentity(p2_name, to_id(p2_name), self._registry.assign_or_get(p2_name))
        winner = self._registry.assign_or_get(battle["winner"])
        room_id = battle.get("roomid")

        result = dict(battle)
        result["p1"] = p1.pseudonym
        result["p2"] = p2.pseudonym
        result["winner"] = winner
        for field_name in self._NULLED_FIELDS:
            result[field_name] = None
        result["timestamp"] = self._truncate_timestamp(battle["timestamp"])
        result["inputLog"] = self._anonymize_input_log(battle["inputLog"], p1, p2)
        result["log"] = self._anonymize_log(battle["log"], p1, p2)

        output = json.dumps(result, ensure_ascii=False, separators=(",", ":"))
        self._check_for_leaks(output, room_id, p1, p2)

        self._battle_number += 1
        Log.debug(
            f"Anonymized battle {self._battle_number}: "
            f"{len(self._registry)} players known"
        )
        return output, self._battle_number

    def _parse(self, raw: str) -> dict[str, Any]:
        try:
            battle = json.loads(raw, parse_constant=self._reject_constant)
            # Unpaired surrogate escapes decode but cannot be written back as UTF-8
            json.dumps(battle, ensure_ascii=False).encode("utf-8")
        except json.JSONDecodeError as exc:
            raise ParseError(f"Battle log is not valid JSON: {exc}") from exc
        except RecursionError as exc:
            raise ParseError(f"Battle log is nested too deeply: {exc}") from exc
        except UnicodeEncodeError as exc:
            raise ParseError(f"Battle log contains an unpaired surrogate: {exc}") from exc

        if not isinstance(battle, dict):
            raise SchemaError(
                f"Battle log must be a JSON object, got {type(battle).__name__}"
            )
        for field_name in self._STRING_FIELDS:
            if not isinstance(battle.get(field_name), str):
                raise SchemaError(f"Field '{field_name}' must be a string")
        for field_name in self._LIST_FIELDS:
            entries = battle.get(field_name)
            if not isinstance(entries, list) or not all(
                isinstance(entry, str) for entry in entries
            ):
                raise SchemaError(f"Field '{field_name}' must be a list of strings")
        return battle

    @staticmethod
    def _reject_constant(constant: str) -> float:
        raise ParseError(f"Battle log is not valid JSON: {constant} is not allowed")

    # ------------------------------------------------------------------
    # Field rewriting
    # ------------------------------------------------------------------

    @staticmethod
    def _truncate_timestamp(timestamp: str) -> str:
        # "Sat Nov 21 2020 17:05:04 GMT-0500" -> "Sat Nov 21 2020 17:XX"
        return timestamp.split(":", 1)[0] + ":XX"

    def _anonymize_input_log(
        self,
        input_log: list[str],
        p1: PlayerIdentity,
        p2: PlayerIdentity,
    ) -> list[str]:
        anonymized: list[str] = []
        for entry in input_log:
            if entry.startswith(">player p1"):
                entry = self._replace_input_log_name(entry, p1.pseudonym)
            elif entry.startswith(">player p2"):
                entry = self._replace_input_log_name(entry, p2.pseudonym)
            elif entry.startswith(">chat "):
                continue
            anonymized.append(entry)
        return anonymized

    def _replace_input_log_name(self, entry: str, pseudonym: str) -> str:
        return self._INPUTLOG_NAME_RE.sub(
            lambda _: f'name":"{pseudonym}",', entry, count=1
        )

    def _anonymize_log(
        self,
        log: list[str],
        p1: PlayerIdentity,
        p2: PlayerIdentity,
    ) -> list[str]:
        p1_re = self._position_pattern("p1", p1)
        p2_re = self._position_pattern("p2", p2)

        anonymized: list[str] = []
        for entry in log:
            # Chat and timer lines are a privacy threat even with names replaced
            if entry.startswith(self._DROPPED_LOG_PREFIXES):
                continue
            if entry.startswith(self._NAMED_LOG_PREFIXES):
                entry = self._replace_literal(entry, p1.name, p1.pseudonym)
                entry = self._replace_literal(entry, p2.name, p2.pseudonym)
                entry = self._replace_literal(entry, p1.userid, p1.pseudonym)
                entry = self._replace_literal(entry, p2.userid, p2.pseudonym)
            else:
                entry = self._replace_position(entry, p1_re, p1.pseudonym)
                entry = self._replace_position(entry, p2_re, p2.pseudonym)
            anonymized.append(entry)
        return anonymized

    @staticmethod
    def _replace_literal(entry: str, term: str, pseudonym: str) -> str:
        if not term:
            return entry
        return entry.replace(term, pseudonym)

    @staticmethod
    def _position_pattern(side: str, player: PlayerIdentity) -> re.Pattern[str] | None:
        """Build ``|p1a: <name or userid>`` for one side; None if the player has no spelling."""
        terms = player.search_terms
        if not terms:
            return None
        alternatives = "|".join(re.escape(term) for term in terms)
        return re.compile(rf"(\|{side}[A-Za-z]?: )(?:{alternatives})")

    @staticmethod
    def _replace_position(
        entry: str,
        pattern: re.Pattern[str] | None,
        pseudonym: str,
    ) -> str:
        if pattern is None:
            return entry
        return pattern.sub(lambda match: match.group(1) + pseudonym, entry)

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def _check_for_leaks(
        self,
        output: str,
        room_id: object,
        p1: PlayerIdentity,
        p2: PlayerIdentity,
    ) -> None:
        """Report (and in strict mode refuse) output that still names a player."""
        leaked = [
            term for term in (*p1.search_terms, *p2.search_terms) if term in output
        ]
        if not leaked:
            return

        Log.error(f"Player name survived anonymization in room {room_id}")
        if self._strict_mode:
            raise LeakDetectedError(
                f"Player name survived anonymization in room {room_id}",
                room_id=room_id,
            )
