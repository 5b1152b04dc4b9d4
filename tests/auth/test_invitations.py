"""
Tests for staff invitation issuance and the invitation state machine.
"""
import re
from datetime import timedelta

import pytest
from sqlalchemy import event

from clinic_api.auth.exceptions import (
    DuplicateEmailException,
    InvalidInvitationTokenException,
    InvitationAlreadyUsedException,
    InvitationExpiredException,
    PermissionDeniedException,
)
from clinic_api.auth.models import StaffInvitation
from clinic_api.auth.schemas import (
    AcceptInvitationRequest,
    InviteStaffRequest,
    LoginRequest,
    SignupRequest,
)
from clinic_api.auth import service as auth_service_module
from clinic_api.auth.service import AuthService
from clinic_api.core.security import ensure_utc, utc_now
from clinic_api.users.models import User, UserRole


def invite(service, owner, email="staff@x.com", role=UserRole.ADMIN):
    return service.invite_staff(
        owner.user.clinic_id,
        owner.user.sub,
        InviteStaffRequest(email=email, role=role),
    )


def accept(service, token, full_name="Staff Name", password="password1"):
    return service.accept_invitation(AcceptInvitationRequest(token=token, full_name=full_name, password=password))


def test_invite_returns_token_and_expiry(auth_service, owner, db):
    before = utc_now()
    result = invite(auth_service, owner)

    assert len(result.token) == 64
    assert re.match(r"^[A-Za-z0-9_-]+$", result.token)
    expected = before + timedelta(hours=72)
    assert expected - timedelta(seconds=5) <= result.expires_at <= expected + timedelta(seconds=5)

    invitation = db.query(StaffInvitation).one()
    assert invitation.id == result.invitation_id
    assert invitation.accepted_at is None
    assert invitation.clinic_id == owner.user.clinic_id
    assert invitation.created_by_id == owner.user.sub
    assert invitation.role == UserRole.ADMIN


def test_invite_expiry_window_comes_from_settings(db, owner, test_settings):
    service = AuthService(db, test_settings.model_copy(update={"invite_expiry_hours": 24}))
    before = utc_now()

    result = invite(service, owner)

    assert abs(result.expires_at - (before + timedelta(hours=24))) < timedelta(seconds=5)


def test_invite_existing_user_email_fails(auth_service, owner):
    with pytest.raises(DuplicateEmailException):
        invite(auth_service, owner, email="owner@x.com")


def test_invite_email_registered_in_other_clinic_fails(auth_service, owner):
    auth_service.signup(SignupRequest(
        clinic_name="Other Clinic", owner_email="other@x.com", owner_name="Other", password="password1",
    ))

    with pytest.raises(DuplicateEmailException):
        invite(auth_service, owner, email="other@x.com")


def test_invite_requires_creator_in_clinic(auth_service, owner):
    other = auth_service.signup(SignupRequest(
        clinic_name="Other Clinic", owner_email="other@x.com", owner_name="Other", password="password1",
    ))

    with pytest.raises(PermissionDeniedException):
        auth_service.invite_staff(
            owner.user.clinic_id,
            other.user.sub,
            InviteStaffRequest(email="staff@x.com", role=UserRole.NURSE),
        )


def test_accept_creates_user_in_inviter_clinic(auth_service, owner, db):
    invitation = invite(auth_service, owner)

    result = accept(auth_service, invitation.token)

    assert result.user.role == UserRole.ADMIN
    assert result.user.clinic_id == owner.user.clinic_id
    assert result.user.email == "staff@x.com"
    assert result.user.full_name == "Staff Name"
    assert auth_service.signer.verify(result.access_token) == result.user

    user = db.query(User).filter(User.email == "staff@x.com").one()
    stored = db.query(StaffInvitation).one()
    assert user.invitation_id == stored.id
    assert user.invited_at is not None
    assert stored.accepted_at is not None


def test_accepted_user_can_login(auth_service, owner):
    accept(auth_service, invite(auth_service, owner).token, password="staffpass1")

    result = auth_service.login(LoginRequest(email="staff@x.com", password="staffpass1"))
    assert result.user.role == UserRole.ADMIN


def test_second_acceptance_fails_with_already_used(auth_service, owner, db):
    token = invite(auth_service, owner).token
    accept(auth_service, token)

    with pytest.raises(InvitationAlreadyUsedException) as exc_info:
        accept(auth_service, token, full_name="Someone Else")

    assert exc_info.value.status_code == 400
    assert db.query(User).filter(User.email == "staff@x.com").count() == 1


def test_unknown_token_fails_with_invalid_token(auth_service, owner):
    with pytest.raises(InvalidInvitationTokenException) as exc_info:
        accept(auth_service, "x" * 64)

    assert exc_info.value.status_code == 400


def test_expired_invitation_fails_even_if_unused(auth_service, owner, db):
    token = invite(auth_service, owner).token
    invitation = db.query(StaffInvitation).one()
    invitation.expires_at = utc_now() - timedelta(minutes=1)
    db.commit()

    with pytest.raises(InvitationExpiredException) as exc_info:
        accept(auth_service, token)

    assert exc_info.value.status_code == 403
    assert db.query(StaffInvitation).one().accepted_at is None
    assert db.query(User).filter(User.email == "staff@x.com").first() is None


def test_acceptance_at_expiry_instant_is_rejected(db, owner, test_settings):
    service = AuthService(db, test_settings.model_copy(update={"invite_expiry_hours": 0}))
    token = invite(service, owner).token

    with pytest.raises(InvitationExpiredException):
        accept(service, token)


def test_used_check_precedes_expiry_check(auth_service, owner, db):
    token = invite(auth_service, owner).token
    accept(auth_service, token)
    invitation = db.query(StaffInvitation).one()
    invitation.expires_at = utc_now() - timedelta(minutes=1)
    db.commit()

    with pytest.raises(InvitationAlreadyUsedException):
        accept(auth_service, token)


def test_acceptance_fails_when_email_registered_after_invite(auth_service, owner, db):
    """
    User creation and invitation consumption roll back together.
    """
    token = invite(auth_service, owner).token
    auth_service.signup(SignupRequest(
        clinic_name="Other Clinic", owner_email="staff@x.com", owner_name="Staff", password="password1",
    ))

    with pytest.raises(DuplicateEmailException):
        accept(auth_service, token)

    invitation = db.query(StaffInvitation).one()
    assert invitation.accepted_at is None
    assert db.query(User).filter(User.email == "staff@x.com").count() == 1


def test_invitation_expires_at_is_stored_in_utc(auth_service, owner, db):
    result = invite(auth_service, owner)

    stored = db.query(StaffInvitation).one()
    assert ensure_utc(stored.expires_at) == result.expires_at


def test_invite_email_differing_only_in_case_fails(auth_service, owner):
    with pytest.raises(DuplicateEmailException):
        invite(auth_service, owner, email="OWNER@X.com")


def test_invited_email_is_stored_in_lower_case(auth_service, owner, db):
    result = invite(auth_service, owner, email="New.Staff@X.com")

    accepted = accept(auth_service, result.token)

    assert accepted.user.email == "new.staff@x.com"
    assert db.query(StaffInvitation).filter(StaffInvitation.id == result.invitation_id).one().email == "new.staff@x.com"


def test_password_is_hashed_before_invitation_is_claimed(auth_service, owner, db, monkeypatch):
    token = invite(auth_service, owner).token
    steps = []

    real_hash = auth_service_module.hash_password

    def recording_hash(password):
        steps.append("hash")
        return real_hash(password)

    def record_update(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith("UPDATE STAFF_INVITATIONS"):
            steps.append("claim")

    monkeypatch.setattr(auth_service_module, "hash_password", recording_hash)
    engine = db.get_bind()
    event.listen(engine, "before_cursor_execute", record_update)
    try:
        accept(auth_service, token)
    finally:
        event.remove(engine, "before_cursor_execute", record_update)

    assert steps == ["hash", "claim"]
