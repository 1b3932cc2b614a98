"""
Tests for verification code issuance and single-use validation.
"""

from datetime import timedelta

from otp_auth.models.otp_record import OtpRecord
from otp_auth.services.otp_service import OtpService

from conftest import FixedRandom


class TestIssue:
    def test_returns_six_digit_code(self, otp_service):
        code = otp_service.issue("a@x.com")
        assert code == "482910"
        assert len(code) == 6 and code.isdigit()

    def test_leading_zeros_are_kept(self, otp_store, clock):
        service = OtpService(otp_store, rng=FixedRandom("007331"), clock=clock)
        assert service.issue("a@x.com") == "007331"
        assert otp_store.find_valid("a@x.com", "007331", clock()) is not None

    def test_persists_unused_record_expiring_in_five_minutes(self, otp_service, db, clock):
        otp_service.issue("a@x.com")
        records = db.query(OtpRecord).filter(OtpRecord.email == "a@x.com").all()
        assert len(records) == 1
        assert records[0].used is False
        assert records[0].expires_at == clock() + timedelta(minutes=5)

    def test_earlier_codes_stay_valid(self, otp_store, clock, db):
        service = OtpService(otp_store, rng=FixedRandom("111111", "222222"), clock=clock)
        service.issue("a@x.com")
        service.issue("a@x.com")
        assert db.query(OtpRecord).filter(OtpRecord.email == "a@x.com").count() == 2
        assert service.verify("a@x.com", "111111") is True
        assert service.verify("a@x.com", "222222") is True

    def test_default_source_generates_digits(self, otp_store):
        code = OtpService(otp_store).generate_code()
        assert len(code) == 6
        assert code.isdigit()


class TestVerify:
    def test_wrong_then_right_then_reused(self, otp_service):
        assert otp_service.issue("a@x.com") == "482910"
        assert otp_service.verify("a@x.com", "000000") is False
        assert otp_service.verify("a@x.com", "482910") is True
        assert otp_service.verify("a@x.com", "482910") is False

    def test_marks_record_used(self, otp_service, db):
        otp_service.issue("a@x.com")
        otp_service.verify("a@x.com", "482910")
        record = db.query(OtpRecord).filter(OtpRecord.email == "a@x.com").one()
        assert record.used is True

    def test_code_is_bound_to_its_email(self, otp_service):
        otp_service.issue("a@x.com")
        assert otp_service.verify("b@x.com", "482910") is False
        assert otp_service.verify("a@x.com", "482910") is True

    def test_never_issued(self, otp_service):
        assert otp_service.verify("a@x.com", "482910") is False

    def test_expired_at_expiry_instant(self, otp_service, clock):
        otp_service.issue("a@x.com")
        clock.advance(minutes=5)
        assert otp_service.verify("a@x.com", "482910") is False

    def test_valid_just_before_expiry(self, otp_service, clock):
        otp_service.issue("a@x.com")
        clock.advance(minutes=4, seconds=59)
        assert otp_service.verify("a@x.com", "482910") is True

    def test_lost_race_is_rejected(self, otp_service, otp_store, clock):
        otp_service.issue("a@x.com")
        record = otp_store.find_valid("a@x.com", "482910", clock())
        # A concurrent verifier consumes the row after our lookup
        assert otp_store.mark_used(record) is True
        assert otp_store.mark_used(record) is False

    def test_second_session_cannot_reuse(self, otp_service, session_factory, clock):
        from otp_auth.repositories.otp_store import OtpStore

        otp_service.issue("a@x.com")
        other = session_factory()
        try:
            other_service = OtpService(OtpStore(other), clock=clock)
            assert other_service.verify("a@x.com", "482910") is True
            assert otp_service.verify("a@x.com", "482910") is False
        finally:
            other.close()
