"""
Tournament eligibility rule models.

A rule's ``config`` payload is stored as JSON with camelCase keys. Each rule
type has its own config dataclass; ``parse_rule_config`` turns a payload into
the matching dataclass and rejects payloads that lack a required field.
"""

import json
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional, Tuple, Union

from utils.date_utils import DateUtils
from .enums import GeographicScope, RuleType


class RuleConfigError(ValueError):
    """Raised when a rule's type or configuration payload is malformed."""


@dataclass(frozen=True)
class AgeRangeConfig:
    age_calculation_date: date
    min_age: Optional[int] = None
    max_age: Optional[int] = None


@dataclass(frozen=True)
class GeographicConfig:
    scope: GeographicScope
    allowed_ids: Tuple[str, ...]


@dataclass(frozen=True)
class PlayerStatusConfig:
    allowed_statuses: Tuple[str, ...]


@dataclass(frozen=True)
class DocumentRequirementConfig:
    required_documents: Tuple[str, ...]


@dataclass(frozen=True)
class ConsentRequirementConfig:
    required_consents: Tuple[str, ...]


@dataclass(frozen=True)
class GenderRestrictionConfig:
    allowed_genders: Tuple[str, ...]


@dataclass(frozen=True)
class MedicalRequirementConfig:
    require_valid_medical: bool
    max_medical_age: Optional[int] = None


RuleConfig = Union[
    AgeRangeConfig,
    GeographicConfig,
    PlayerStatusConfig,
    DocumentRequirementConfig,
    ConsentRequirementConfig,
    GenderRestrictionConfig,
    MedicalRequirementConfig,
]


@dataclass
class EligibilityRule:
    """A tournament-scoped eligibility constraint configured by an administrator."""
    id: str
    tournament_id: str
    name: str
    rule_type: str
    config: Optional[RuleConfig] = None
    raw_config: Optional[Dict[str, Any]] = None
    description: Optional[str] = None
    is_active: bool = True

    @property
    def parsed_type(self) -> Optional[RuleType]:
        return RuleType.parse(self.rule_type)


def _optional_int(payload: Dict[str, Any], key: str, minimum: int = 0) -> Optional[int]:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RuleConfigError(f"'{key}' must be a whole number, got {value!r}")
    if isinstance(value, float) and (not math.isfinite(value) or not value.is_integer()):
        raise RuleConfigError(f"'{key}' must be a whole number, got {value!r}")
    if value < minimum:
        raise RuleConfigError(f"'{key}' must be at least {minimum}, got {value!r}")
    return int(value)


def _string_list(payload: Dict[str, Any], key: str) -> Tuple[str, ...]:
    if key not in payload:
        raise RuleConfigError(f"'{key}' is required")
    value = payload[key]
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise RuleConfigError(f"'{key}' must be a list, got {value!r}")
    return tuple(str(item) for item in value)


def _parse_age_range(payload: Dict[str, Any]) -> AgeRangeConfig:
    calculation_date = DateUtils.parse_date(payload.get('ageCalculationDate'))
    if calculation_date is None:
        raise RuleConfigError("'ageCalculationDate' is required and must be a date")
    min_age = _optional_int(payload, 'minAge')
    max_age = _optional_int(payload, 'maxAge')
    if min_age is not None and max_age is not None and min_age > max_age:
        raise RuleConfigError(f"'minAge' ({min_age}) is greater than 'maxAge' ({max_age})")
    return AgeRangeConfig(age_calculation_date=calculation_date, min_age=min_age, max_age=max_age)


def _parse_geographic(payload: Dict[str, Any]) -> GeographicConfig:
    scope = GeographicScope.parse(payload.get('scope'))
    if scope is None:
        raise RuleConfigError(f"'scope' must be one of WARD, SUBCOUNTY, COUNTY, got {payload.get('scope')!r}")
    return GeographicConfig(scope=scope, allowed_ids=_string_list(payload, 'allowedIds'))


def _parse_medical(payload: Dict[str, Any]) -> MedicalRequirementConfig:
    require_valid = payload.get('requireValidMedical')
    if not isinstance(require_valid, bool):
        raise RuleConfigError(f"'requireValidMedical' must be true or false, got {require_valid!r}")
    return MedicalRequirementConfig(
        require_valid_medical=require_valid,
        max_medical_age=_optional_int(payload, 'maxMedicalAge', minimum=1)
    )


_PARSERS = {
    RuleType.AGE_RANGE: _parse_age_range,
    RuleType.GEOGRAPHIC: _parse_geographic,
    RuleType.PLAYER_STATUS: lambda p: PlayerStatusConfig(_string_list(p, 'allowedStatuses')),
    RuleType.DOCUMENT_REQUIREMENT: lambda p: DocumentRequirementConfig(_string_list(p, 'requiredDocuments')),
    RuleType.CONSENT_REQUIREMENT: lambda p: ConsentRequirementConfig(_string_list(p, 'requiredConsents')),
    RuleType.GENDER_RESTRICTION: lambda p: GenderRestrictionConfig(_string_list(p, 'allowedGenders')),
    RuleType.MEDICAL_REQUIREMENT: _parse_medical,
}


def load_config_payload(payload) -> Dict[str, Any]:
    """Accept a dict or a JSON document and return the payload as a dict."""
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError as e:
            raise RuleConfigError(f"Rule config is not valid JSON: {e}")
    if not isinstance(payload, dict):
        raise RuleConfigError(f"Rule config must be an object, got {type(payload).__name__}")
    return payload


def parse_rule_config(rule_type, payload) -> RuleConfig:
    """Convert a rule's config payload into the dataclass for its rule type."""
    parsed_type = RuleType.parse(rule_type)
    if parsed_type is None:
        raise RuleConfigError(f"Unknown rule type: {rule_type}")
    return _PARSERS[parsed_type](load_config_payload(payload))


def config_to_payload(config: RuleConfig) -> Dict[str, Any]:
    """Inverse of parse_rule_config, producing the stored camelCase payload."""
    if isinstance(config, AgeRangeConfig):
        payload = {'ageCalculationDate': config.age_calculation_date.isoformat()}
        if config.min_age is not None:
            payload['minAge'] = config.min_age
        if config.max_age is not None:
            payload['maxAge'] = config.max_age
        return payload
    if isinstance(config, GeographicConfig):
        return {'scope': config.scope.value, 'allowedIds': list(config.allowed_ids)}
    if isinstance(config, PlayerStatusConfig):
        return {'allowedStatuses': list(config.allowed_statuses)}
    if isinstance(config, DocumentRequirementConfig):
        return {'requiredDocuments': list(config.required_documents)}
    if isinstance(config, ConsentRequirementConfig):
        return {'requiredConsents': list(config.required_consents)}
    if isinstance(config, GenderRestrictionConfig):
        return {'allowedGenders': list(config.allowed_genders)}
    if isinstance(config, MedicalRequirementConfig):
        payload = {'requireValidMedical': config.require_valid_medical}
        if config.max_medical_age is not None:
            payload['maxMedicalAge'] = config.max_medical_age
        return payload
    raise RuleConfigError(f"Unsupported rule config: {config!r}")
