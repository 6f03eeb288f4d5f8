#!/usr/bin/env python3
"""
Tests for tournament-configured eligibility rules.

This test file focuses on:
- Rule config parsing and validation
- Each rule type's evaluator
- Age range boundaries
- Dispatch of unknown and malformed rules
"""

import unittest
from datetime import date

from eligibility.rule_evaluators import evaluate_rule
from models.enums import GeographicScope, MedicalStatus, RegistrationStatus, Severity, VerificationStatus
from models.player import PlayerConsent, PlayerDocument, PlayerRecord
from models.rules import (
    AgeRangeConfig, EligibilityRule, GeographicConfig, MedicalRequirementConfig, RuleConfigError,
    config_to_payload, parse_rule_config
)

AS_OF = date(2025, 9, 1)


def make_player(**overrides) -> PlayerRecord:
    values = dict(
        upid='UPID-001',
        first_name='Brian',
        last_name='Kamau',
        dob=date(2000, 3, 10),
        sex='MALE',
        status='ACTIVE',
        registration_status=RegistrationStatus.APPROVED,
        medical_clearance_status=MedicalStatus.VALID,
        medical_clearance_date=date(2025, 6, 1),
        medical_expiry_date=date(2026, 6, 1),
        ward_id='W-PARKLANDS',
        sub_county_id='SC-WESTLANDS',
        county_id='C-NAIROBI'
    )
    values.update(overrides)
    return PlayerRecord(**values)


def make_rule(rule_type: str, payload, rule_id: str = 'RULE-1', name: str = 'Test Rule') -> EligibilityRule:
    return EligibilityRule(
        id=rule_id,
        tournament_id='T-1',
        name=name,
        rule_type=rule_type,
        config=parse_rule_config(rule_type, payload),
        raw_config=payload
    )


def evaluate(rule, player=None, documents=(), consents=()):
    return evaluate_rule(rule, player or make_player(), list(documents), list(consents), AS_OF)


class TestRuleConfigParsing(unittest.TestCase):
    """Test cases for rule config validation."""

    def test_age_range_parses_camel_case(self):
        config = parse_rule_config('AGE_RANGE', {'minAge': 18, 'maxAge': 35, 'ageCalculationDate': '2025-01-01'})
        self.assertEqual(config, AgeRangeConfig(age_calculation_date=date(2025, 1, 1), min_age=18, max_age=35))

    def test_age_range_bounds_are_optional(self):
        config = parse_rule_config('AGE_RANGE', {'ageCalculationDate': '2025-01-01'})
        self.assertIsNone(config.min_age)
        self.assertIsNone(config.max_age)

    def test_age_range_requires_calculation_date(self):
        with self.assertRaises(RuleConfigError):
            parse_rule_config('AGE_RANGE', {'minAge': 18})

    def test_age_range_rejects_inverted_bounds(self):
        with self.assertRaises(RuleConfigError):
            parse_rule_config('AGE_RANGE', {'minAge': 30, 'maxAge': 20, 'ageCalculationDate': '2025-01-01'})

    def test_non_integer_age_is_rejected(self):
        with self.assertRaises(RuleConfigError):
            parse_rule_config('AGE_RANGE', {'minAge': 'eighteen', 'ageCalculationDate': '2025-01-01'})

    def test_non_finite_numbers_are_rejected(self):
        for value in (float('nan'), float('inf'), float('-inf'), 18.5):
            with self.subTest(value=value):
                with self.assertRaises(RuleConfigError):
                    parse_rule_config('AGE_RANGE', {'minAge': value, 'ageCalculationDate': '2025-01-01'})
                with self.assertRaises(RuleConfigError):
                    parse_rule_config('MEDICAL_REQUIREMENT', {'requireValidMedical': True, 'maxMedicalAge': value})

    def test_whole_float_is_accepted(self):
        config = parse_rule_config('AGE_RANGE', {'minAge': 18.0, 'ageCalculationDate': '2025-01-01'})
        self.assertEqual(config.min_age, 18)

    def test_geographic_requires_known_scope(self):
        with self.assertRaises(RuleConfigError):
            parse_rule_config('GEOGRAPHIC', {'scope': 'REGION', 'allowedIds': ['X']})

    def test_list_fields_are_required(self):
        for rule_type in ('PLAYER_STATUS', 'DOCUMENT_REQUIREMENT', 'CONSENT_REQUIREMENT', 'GENDER_RESTRICTION'):
            with self.subTest(rule_type=rule_type):
                with self.assertRaises(RuleConfigError):
                    parse_rule_config(rule_type, {})

    def test_string_is_not_a_list(self):
        with self.assertRaises(RuleConfigError):
            parse_rule_config('GENDER_RESTRICTION', {'allowedGenders': 'FEMALE'})

    def test_medical_requires_boolean_flag(self):
        with self.assertRaises(RuleConfigError):
            parse_rule_config('MEDICAL_REQUIREMENT', {'maxMedicalAge': 30})

    def test_unknown_rule_type(self):
        with self.assertRaises(RuleConfigError):
            parse_rule_config('NATIONALITY', {'allowed': ['KE']})

    def test_json_payload_is_accepted(self):
        config = parse_rule_config('GEOGRAPHIC', '{"scope": "COUNTY", "allowedIds": ["C-NAIROBI"]}')
        self.assertEqual(config, GeographicConfig(scope=GeographicScope.COUNTY, allowed_ids=('C-NAIROBI',)))

    def test_payload_round_trip_for_medical(self):
        config = MedicalRequirementConfig(require_valid_medical=True, max_medical_age=90)
        self.assertEqual(parse_rule_config('MEDICAL_REQUIREMENT', config_to_payload(config)), config)


class TestAgeRangeRule(unittest.TestCase):
    """Test cases for AGE_RANGE rules, including inclusive bounds."""

    def setUp(self):
        self.rule = make_rule('AGE_RANGE', {'minAge': 18, 'maxAge': 35, 'ageCalculationDate': '2025-01-01'})

    def test_underage_player(self):
        outcome = evaluate(self.rule, make_player(dob=date(2007, 6, 15)))
        self.assertEqual(outcome.violation.reason, 'Player is 17 years old, minimum age is 18')
        self.assertEqual(outcome.violation.severity, Severity.HIGH)
        self.assertTrue(outcome.violation.can_override)
        self.assertEqual(outcome.violation.rule_id, 'RULE-1')
        self.assertEqual(outcome.violation.rule_type, 'AGE_RANGE')

    def test_exactly_minimum_age(self):
        self.assertIsNone(evaluate(self.rule, make_player(dob=date(2006, 6, 15))).violation)

    def test_exactly_maximum_age(self):
        self.assertIsNone(evaluate(self.rule, make_player(dob=date(1989, 6, 15))).violation)

    def test_one_year_over_maximum(self):
        outcome = evaluate(self.rule, make_player(dob=date(1988, 6, 15)))
        self.assertEqual(outcome.violation.reason, 'Player is 36 years old, maximum age is 35')
        self.assertTrue(outcome.violation.can_override)

    def test_missing_date_of_birth(self):
        outcome = evaluate(self.rule, make_player(dob=None))
        self.assertEqual(outcome.violation.reason, 'Date of birth is not set')
        self.assertFalse(outcome.violation.can_override)

    def test_only_maximum_configured(self):
        rule = make_rule('AGE_RANGE', {'maxAge': 12, 'ageCalculationDate': '2025-01-01'})
        self.assertIsNone(evaluate(rule, make_player(dob=date(2020, 1, 1))).violation)
        self.assertIsNotNone(evaluate(rule, make_player(dob=date(2000, 1, 1))).violation)


class TestGeographicRule(unittest.TestCase):
    """Test cases for GEOGRAPHIC rules."""

    def test_county_not_allowed(self):
        rule = make_rule('GEOGRAPHIC', {'scope': 'COUNTY', 'allowedIds': ['C-NAIROBI']})
        outcome = evaluate(rule, make_player(county_id='C-KIAMBU'))
        self.assertEqual(outcome.violation.severity, Severity.HIGH)
        self.assertTrue(outcome.violation.can_override)
        self.assertEqual(outcome.violation.reason, "Player's county is not eligible for this tournament")

    def test_county_allowed(self):
        rule = make_rule('GEOGRAPHIC', {'scope': 'COUNTY', 'allowedIds': ['C-NAIROBI']})
        self.assertIsNone(evaluate(rule).violation)

    def test_scope_not_set_is_not_overridable(self):
        rule = make_rule('GEOGRAPHIC', {'scope': 'SUBCOUNTY', 'allowedIds': ['SC-WESTLANDS']})
        outcome = evaluate(rule, make_player(sub_county_id=None))
        self.assertEqual(outcome.violation.reason, 'Player sub-county is not set')
        self.assertFalse(outcome.violation.can_override)

    def test_ward_scope(self):
        rule = make_rule('GEOGRAPHIC', {'scope': 'WARD', 'allowedIds': ['W-KAREN']})
        self.assertIsNotNone(evaluate(rule).violation)


class TestRemainingRules(unittest.TestCase):
    """Test cases for status, document, consent, gender and medical rules."""

    def test_player_status_is_medium(self):
        rule = make_rule('PLAYER_STATUS', {'allowedStatuses': ['ACTIVE']})
        outcome = evaluate(rule, make_player(status='RETIRED'))
        self.assertEqual(outcome.violation.severity, Severity.MEDIUM)
        self.assertTrue(outcome.violation.can_override)
        self.assertEqual(outcome.violation.reason, 'Player status is RETIRED, allowed statuses are: ACTIVE')
        self.assertIsNone(evaluate(rule).violation)

    def test_document_requirement_needs_verified_documents(self):
        rule = make_rule('DOCUMENT_REQUIREMENT', {'requiredDocuments': ['PASSPORT', 'BIRTH_CERTIFICATE']})
        documents = [
            PlayerDocument(upid='UPID-001', document_type='PASSPORT', verification_status=VerificationStatus.VERIFIED),
            PlayerDocument(upid='UPID-001', document_type='BIRTH_CERTIFICATE')
        ]
        outcome = evaluate(rule, documents=documents)
        self.assertEqual(outcome.violation.reason, 'Missing required documents: BIRTH_CERTIFICATE')
        self.assertFalse(outcome.violation.can_override)

    def test_consent_requirement(self):
        rule = make_rule('CONSENT_REQUIREMENT', {'requiredConsents': ['MEDIA_CONSENT']})
        self.assertIsNotNone(evaluate(rule).violation)
        consents = [PlayerConsent(upid='UPID-001', consent_type='MEDIA_CONSENT', is_consented=True)]
        self.assertIsNone(evaluate(rule, consents=consents).violation)

    def test_gender_restriction(self):
        rule = make_rule('GENDER_RESTRICTION', {'allowedGenders': ['FEMALE']})
        outcome = evaluate(rule)
        self.assertEqual(outcome.violation.reason, 'Tournament is restricted to FEMALE players only')
        self.assertEqual(outcome.violation.severity, Severity.HIGH)
        self.assertIsNone(evaluate(rule, make_player(sex='FEMALE')).violation)

    def test_medical_requirement_disabled(self):
        rule = make_rule('MEDICAL_REQUIREMENT', {'requireValidMedical': False})
        player = make_player(medical_clearance_status=MedicalStatus.REJECTED)
        self.assertIsNone(evaluate(rule, player).violation)

    def test_medical_requirement_needs_valid_status(self):
        rule = make_rule('MEDICAL_REQUIREMENT', {'requireValidMedical': True, 'maxMedicalAge': 30})
        outcome = evaluate(rule, make_player(medical_clearance_status=MedicalStatus.PENDING))
        self.assertEqual(outcome.violation.severity, Severity.HIGH)
        self.assertFalse(outcome.violation.can_override)

    def test_medical_clearance_too_old(self):
        rule = make_rule('MEDICAL_REQUIREMENT', {'requireValidMedical': True, 'maxMedicalAge': 60})
        outcome = evaluate(rule, make_player(medical_clearance_date=date(2025, 6, 1)))
        self.assertEqual(outcome.violation.severity, Severity.MEDIUM)
        self.assertTrue(outcome.violation.can_override)
        self.assertEqual(outcome.violation.reason,
                         'Medical clearance is 92 days old, maximum allowed is 60 days')

    def test_medical_clearance_within_age(self):
        rule = make_rule('MEDICAL_REQUIREMENT', {'requireValidMedical': True, 'maxMedicalAge': 92})
        self.assertIsNone(evaluate(rule).violation)


class TestRuleDispatch(unittest.TestCase):
    """Test cases for unknown and malformed rules."""

    def test_unknown_rule_type_is_skipped(self):
        rule = EligibilityRule(id='R-X', tournament_id='T-1', name='Nationality', rule_type='NATIONALITY',
                               raw_config={'allowed': ['KE']})
        outcome = evaluate(rule)
        self.assertIsNone(outcome.violation)
        self.assertIsNone(outcome.warning)

    def test_malformed_config_becomes_warning(self):
        rule = EligibilityRule(id='R-BAD', tournament_id='T-1', name='Broken Age Rule', rule_type='AGE_RANGE',
                               raw_config={'minAge': 18})
        outcome = evaluate(rule)
        self.assertIsNone(outcome.violation)
        self.assertEqual(outcome.warning.rule_id, 'R-BAD')
        self.assertEqual(outcome.warning.rule_type, 'AGE_RANGE')


if __name__ == '__main__':
    unittest.main()
