#!/usr/bin/env python3
"""
Tests for the baseline eligibility checks.

This test file focuses on:
- Registration status decision table
- Document upload/verification/rejection priority
- Consent verification
- Medical clearance status and expiry
"""

import unittest
from datetime import date

from eligibility.baseline_checks import (
    check_consent_verification, check_document_verification, check_medical_clearance,
    check_registration_status
)
from eligibility.summary import build_summary
from models.enums import MedicalStatus, RegistrationStatus, Severity, VerificationStatus
from models.player import PlayerConsent, PlayerDocument, PlayerRecord

AS_OF = date(2025, 9, 1)


def make_player(**overrides) -> PlayerRecord:
    values = dict(
        upid='UPID-001',
        first_name='Amina',
        last_name='Otieno',
        dob=date(2000, 5, 20),
        sex='FEMALE',
        registration_status=RegistrationStatus.APPROVED,
        medical_clearance_status=MedicalStatus.VALID,
        medical_clearance_date=date(2025, 6, 1),
        medical_expiry_date=date(2026, 6, 1)
    )
    values.update(overrides)
    return PlayerRecord(**values)


def doc(document_type: str, status: VerificationStatus = VerificationStatus.VERIFIED) -> PlayerDocument:
    return PlayerDocument(upid='UPID-001', document_type=document_type, verification_status=status)


def consent(consent_type: str, granted: bool = True) -> PlayerConsent:
    return PlayerConsent(upid='UPID-001', consent_type=consent_type, is_consented=granted)


class TestRegistrationStatusCheck(unittest.TestCase):
    """Test cases for the registration status decision table."""

    def test_approved_has_no_finding(self):
        outcome = check_registration_status(make_player())
        self.assertIsNone(outcome.violation)
        self.assertIsNone(outcome.warning)

    def test_in_review_is_a_warning(self):
        outcome = check_registration_status(make_player(registration_status=RegistrationStatus.IN_REVIEW))
        self.assertIsNone(outcome.violation)
        self.assertEqual(outcome.warning.rule_id, 'REG_STATUS_001')
        self.assertIn('provisional', outcome.warning.message)

    def test_draft_and_submitted_are_high(self):
        for status in (RegistrationStatus.DRAFT, RegistrationStatus.SUBMITTED):
            with self.subTest(status=status):
                outcome = check_registration_status(make_player(registration_status=status))
                self.assertEqual(outcome.violation.rule_id, 'REG_STATUS_002')
                self.assertEqual(outcome.violation.severity, Severity.HIGH)
                self.assertFalse(outcome.violation.can_override)
                self.assertIn(status.value, outcome.violation.reason)
                self.assertIsNone(outcome.warning)

    def test_rejected_is_critical_and_not_overridable(self):
        outcome = check_registration_status(make_player(registration_status=RegistrationStatus.REJECTED))
        self.assertEqual(outcome.violation.severity, Severity.CRITICAL)
        self.assertFalse(outcome.violation.can_override)

    def test_suspended_is_critical_but_overridable(self):
        outcome = check_registration_status(make_player(registration_status=RegistrationStatus.SUSPENDED))
        self.assertEqual(outcome.violation.rule_id, 'REG_STATUS_004')
        self.assertEqual(outcome.violation.severity, Severity.CRITICAL)
        self.assertTrue(outcome.violation.can_override)

    def test_incomplete_is_high(self):
        outcome = check_registration_status(make_player(registration_status=RegistrationStatus.INCOMPLETE))
        self.assertEqual(outcome.violation.rule_id, 'REG_STATUS_005')
        self.assertEqual(outcome.violation.severity, Severity.HIGH)

    def test_unrecognized_stored_status_is_critical(self):
        player = make_player(registration_status=None, registration_status_raw='ARCHIVED')
        outcome = check_registration_status(player)
        self.assertEqual(outcome.violation.rule_id, 'REG_STATUS_006')
        self.assertEqual(outcome.violation.severity, Severity.CRITICAL)
        self.assertFalse(outcome.violation.can_override)
        self.assertIn('ARCHIVED', outcome.violation.reason)


class TestDocumentVerificationCheck(unittest.TestCase):
    """Test cases for the document verification priority order."""

    def test_all_verified(self):
        outcome = check_document_verification([doc('NATIONAL_ID'), doc('SELFIE')])
        self.assertIsNone(outcome.violation)
        self.assertIsNone(outcome.warning)

    def test_missing_type_is_violation(self):
        outcome = check_document_verification([doc('NATIONAL_ID')])
        self.assertEqual(outcome.violation.rule_id, 'DOC_001')
        self.assertEqual(outcome.violation.severity, Severity.HIGH)
        self.assertEqual(outcome.violation.reason, 'Missing required documents: SELFIE')
        self.assertIsNone(outcome.warning)

    def test_no_documents_lists_all_missing(self):
        outcome = check_document_verification([])
        self.assertEqual(outcome.violation.reason, 'Missing required documents: NATIONAL_ID, SELFIE')

    def test_uploaded_but_unverified_is_warning(self):
        outcome = check_document_verification([
            doc('NATIONAL_ID', VerificationStatus.PENDING),
            doc('SELFIE', VerificationStatus.PENDING)
        ])
        self.assertIsNone(outcome.violation)
        self.assertEqual(outcome.warning.rule_id, 'DOC_002')
        self.assertIn('NATIONAL_ID, SELFIE', outcome.warning.message)

    def test_rejected_required_document_reports_pending_first(self):
        outcome = check_document_verification([
            doc('NATIONAL_ID', VerificationStatus.REJECTED),
            doc('SELFIE')
        ])
        self.assertIsNone(outcome.violation)
        self.assertEqual(outcome.warning.rule_id, 'DOC_002')

    def test_rejected_extra_document_is_violation(self):
        outcome = check_document_verification([
            doc('NATIONAL_ID'),
            doc('SELFIE'),
            doc('PASSPORT', VerificationStatus.REJECTED)
        ])
        self.assertEqual(outcome.violation.rule_id, 'DOC_003')
        self.assertIn('PASSPORT', outcome.violation.reason)
        self.assertIsNone(outcome.warning)

    def test_custom_required_documents(self):
        outcome = check_document_verification([doc('PASSPORT')], required_documents=('PASSPORT',))
        self.assertIsNone(outcome.violation)
        self.assertIsNone(outcome.warning)


class TestConsentVerificationCheck(unittest.TestCase):
    """Test cases for consent verification."""

    def test_all_granted(self):
        outcome = check_consent_verification([consent('TERMS_CONDITIONS'), consent('DATA_PROCESSING')])
        self.assertIsNone(outcome.violation)

    def test_refused_consent_counts_as_missing(self):
        outcome = check_consent_verification([
            consent('TERMS_CONDITIONS'),
            consent('DATA_PROCESSING', granted=False)
        ])
        self.assertEqual(outcome.violation.rule_id, 'CONSENT_001')
        self.assertEqual(outcome.violation.reason, 'Missing required consents: DATA_PROCESSING')
        self.assertFalse(outcome.violation.can_override)


class TestMedicalClearanceCheck(unittest.TestCase):
    """Test cases for the medical clearance decision table."""

    def test_valid_and_unexpired(self):
        outcome = check_medical_clearance(make_player(), AS_OF)
        self.assertIsNone(outcome.violation)
        self.assertIsNone(outcome.warning)

    def test_pending_is_warning(self):
        outcome = check_medical_clearance(make_player(medical_clearance_status=MedicalStatus.PENDING), AS_OF)
        self.assertEqual(outcome.warning.rule_id, 'MEDICAL_001')
        self.assertIsNone(outcome.violation)

    def test_pending_wins_over_past_expiry(self):
        player = make_player(medical_clearance_status=MedicalStatus.PENDING, medical_expiry_date=date(2024, 1, 1))
        outcome = check_medical_clearance(player, AS_OF)
        self.assertIsNotNone(outcome.warning)
        self.assertIsNone(outcome.violation)

    def test_rejected_is_overridable(self):
        outcome = check_medical_clearance(make_player(medical_clearance_status=MedicalStatus.REJECTED), AS_OF)
        self.assertEqual(outcome.violation.rule_id, 'MEDICAL_002')
        self.assertTrue(outcome.violation.can_override)

    def test_expired_status(self):
        outcome = check_medical_clearance(make_player(medical_clearance_status=MedicalStatus.EXPIRED), AS_OF)
        self.assertEqual(outcome.violation.rule_id, 'MEDICAL_003')
        self.assertFalse(outcome.violation.can_override)

    def test_valid_status_with_past_expiry_date(self):
        outcome = check_medical_clearance(make_player(medical_expiry_date=date(2025, 8, 31)), AS_OF)
        self.assertEqual(outcome.violation.rule_id, 'MEDICAL_003')

    def test_expiry_on_evaluation_date_counts_as_expired(self):
        outcome = check_medical_clearance(make_player(medical_expiry_date=AS_OF), AS_OF)
        self.assertEqual(outcome.violation.rule_id, 'MEDICAL_003')

    def test_expiry_day_after_evaluation_date_is_valid(self):
        outcome = check_medical_clearance(make_player(medical_expiry_date=date(2025, 9, 2)), AS_OF)
        self.assertIsNone(outcome.violation)

    def test_valid_status_without_expiry_date(self):
        outcome = check_medical_clearance(make_player(medical_expiry_date=None), AS_OF)
        self.assertIsNone(outcome.violation)


class TestMedicalSummaryFlag(unittest.TestCase):
    """Test cases for the summary's medical clearance flag at the expiry boundary."""

    def summary_for(self, player):
        documents = [doc('NATIONAL_ID'), doc('SELFIE')]
        consents = [consent('TERMS_CONDITIONS'), consent('DATA_PROCESSING')]
        return build_summary(player, documents, consents, [], [], AS_OF)

    def test_expiry_on_evaluation_date(self):
        summary = self.summary_for(make_player(medical_expiry_date=AS_OF))
        self.assertFalse(summary.medical_clearance_valid)
        self.assertEqual(summary.next_steps, ['Obtain valid medical clearance'])

    def test_expiry_after_evaluation_date(self):
        summary = self.summary_for(make_player(medical_expiry_date=date(2025, 9, 2)))
        self.assertTrue(summary.medical_clearance_valid)


if __name__ == '__main__':
    unittest.main()
