"""Tests for submission and the application status graph."""

import uuid
from itertools import product

import pytest

from conftest import RecordingNotifier, StubProvider, form_data, make_role
from portal.core.exceptions import InvalidTransition, NotFound, ValidationFailure
from portal.models.application import ApplicationStatus
from portal.services.application_store import ApplicationStore
from portal.services.lifecycle import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATUSES,
    LifecycleController,
    check_transition,
    validate_submission,
)
from portal.services.role_catalog import RoleCatalog
from portal.services.scoring_service import ResumeScorer
from portal.utils.constants import SCORING_FALLBACK_FEEDBACK

RESUME = b"%PDF-1.4 resume"

PENDING = ApplicationStatus.PENDING
SHORTLISTED = ApplicationStatus.SHORTLISTED
REJECTED = ApplicationStatus.REJECTED
ACCEPTED = ApplicationStatus.ACCEPTED

LEGAL_EDGES = {
    (PENDING, SHORTLISTED),
    (PENDING, REJECTED),
    (SHORTLISTED, ACCEPTED),
    (SHORTLISTED, REJECTED),
}


@pytest.mark.parametrize("current,target", list(product(ApplicationStatus, repeat=2)))
def test_check_transition_matches_graph(current, target):
    if (current, target) in LEGAL_EDGES:
        check_transition(current, target)
    else:
        with pytest.raises(InvalidTransition):
            check_transition(current, target)


def test_terminal_statuses():
    assert TERMINAL_STATUSES == {REJECTED, ACCEPTED}
    assert all(not ALLOWED_TRANSITIONS[s] for s in TERMINAL_STATUSES)


def test_validate_submission_collects_every_error():
    with pytest.raises(ValidationFailure) as exc:
        validate_submission(
            form_data(full_name="A", phone="12345", cgpa="", motivation="too short"),
            None,
            None,
        )

    errors = exc.value.errors
    assert {"full_name", "phone", "cgpa", "motivation", "resume"} <= set(errors)
    assert errors["resume"] == "Resume is required"


def test_validate_submission_rejects_unknown_resume_type():
    with pytest.raises(ValidationFailure) as exc:
        validate_submission(form_data(), "resume.exe", RESUME)
    assert "resume" in exc.value.errors


def test_validate_submission_accepts_percentage_cgpa():
    form = validate_submission(form_data(cgpa="85%"), "cv.pdf", RESUME)
    assert form.cgpa == 85.0


async def test_submission_starts_pending_with_score(db, lifecycle, notifier):
    role = await make_role(db)

    application = await lifecycle.submit_application(role.id, form_data(), "Asha CV.pdf", RESUME)

    assert application.status == PENDING.value
    assert application.ai_score == 78
    assert application.ai_feedback == "Good fit"
    assert application.resume_url.startswith("resumes/")
    assert application.resume_url.endswith("-Asha_CV.pdf")
    assert notifier.sent == [
        {
            "kind": "confirmation",
            "email": "asha@example.com",
            "name": "Asha Rao",
            "role_title": "Backend Intern",
        }
    ]


async def test_submission_for_missing_role_is_not_found(lifecycle):
    with pytest.raises(NotFound):
        await lifecycle.submit_application(uuid.uuid4(), form_data(), "cv.pdf", RESUME)


async def test_invalid_submission_stores_nothing(db, lifecycle, notifier):
    role = await make_role(db)

    with pytest.raises(ValidationFailure):
        await lifecycle.submit_application(role.id, form_data(email="not-an-email"), "cv.pdf", RESUME)

    assert await ApplicationStore(db).list_applications() == []
    assert notifier.sent == []


async def test_submission_survives_scoring_failure(db, storage, notifier):
    role = await make_role(db)
    controller = LifecycleController(
        store=ApplicationStore(db),
        catalog=RoleCatalog(db),
        scorer=ResumeScorer(StubProvider(error=TimeoutError("model timed out"))),
        storage=storage,
        notifier=notifier,
    )

    application = await controller.submit_application(role.id, form_data(), "cv.pdf", RESUME)

    assert application.status == PENDING.value
    assert application.ai_score == 0
    assert application.ai_feedback == SCORING_FALLBACK_FEEDBACK


async def test_submission_clamps_out_of_range_score(db, storage, notifier):
    role = await make_role(db)
    controller = LifecycleController(
        store=ApplicationStore(db),
        catalog=RoleCatalog(db),
        scorer=ResumeScorer(StubProvider(score_payload={"score": 140, "feedback": "x" * 900})),
        storage=storage,
        notifier=notifier,
    )

    application = await controller.submit_application(role.id, form_data(), "cv.pdf", RESUME)

    assert application.ai_score == 100
    assert len(application.ai_feedback) == 500


async def test_submission_survives_notification_failure(db, storage):
    role = await make_role(db)
    controller = LifecycleController(
        store=ApplicationStore(db),
        catalog=RoleCatalog(db),
        scorer=ResumeScorer(None),
        storage=storage,
        notifier=RecordingNotifier(fail=True),
    )

    application = await controller.submit_application(role.id, form_data(), "cv.pdf", RESUME)

    stored = await ApplicationStore(db).get_application(application.id)
    assert stored.status == PENDING.value


@pytest.mark.parametrize(
    "path",
    [
        [SHORTLISTED],
        [REJECTED],
        [SHORTLISTED, ACCEPTED],
        [SHORTLISTED, REJECTED],
    ],
)
async def test_legal_paths(db, lifecycle, admin, notifier, path):
    role = await make_role(db)
    application = await lifecycle.submit_application(role.id, form_data(), "cv.pdf", RESUME)

    for target in path:
        application = await lifecycle.transition(admin, application.id, target)

    assert application.status == path[-1].value
    updates = [n["status"] for n in notifier.sent if n["kind"] == "status_update"]
    assert updates == [s.value for s in path]


@pytest.mark.parametrize(
    "setup,target",
    [
        ([], ACCEPTED),
        ([], PENDING),
        ([SHORTLISTED], PENDING),
        ([SHORTLISTED], SHORTLISTED),
        ([REJECTED], SHORTLISTED),
        ([REJECTED], ACCEPTED),
        ([SHORTLISTED, ACCEPTED], REJECTED),
        ([SHORTLISTED, ACCEPTED], PENDING),
    ],
)
async def test_illegal_transition_leaves_status_unchanged(db, lifecycle, admin, notifier, setup, target):
    role = await make_role(db)
    application = await lifecycle.submit_application(role.id, form_data(), "cv.pdf", RESUME)
    for step in setup:
        await lifecycle.transition(admin, application.id, step)
    sent_before = len(notifier.sent)

    with pytest.raises(InvalidTransition) as exc:
        await lifecycle.transition(admin, application.id, target)

    assert exc.value.target == target.value
    stored = await ApplicationStore(db).get_application(application.id)
    expected = setup[-1].value if setup else PENDING.value
    assert stored.status == expected
    assert len(notifier.sent) == sent_before


async def test_repeated_transition_is_rejected(db, lifecycle, admin):
    role = await make_role(db)
    application = await lifecycle.submit_application(role.id, form_data(), "cv.pdf", RESUME)

    await lifecycle.transition(admin, application.id, "shortlisted")
    with pytest.raises(InvalidTransition):
        await lifecycle.transition(admin, application.id, "shortlisted")


async def test_unknown_target_status_is_validation_failure(db, lifecycle, admin):
    role = await make_role(db)
    application = await lifecycle.submit_application(role.id, form_data(), "cv.pdf", RESUME)

    with pytest.raises(ValidationFailure):
        await lifecycle.transition(admin, application.id, "hired")


async def test_transition_missing_application(lifecycle, admin):
    with pytest.raises(NotFound):
        await lifecycle.transition(admin, uuid.uuid4(), SHORTLISTED)


@pytest.mark.parametrize("notifier_kwargs", [{"fail": True}, {"unsuccessful": True}])
async def test_notification_failure_does_not_block_transition(db, storage, admin, notifier_kwargs):
    role = await make_role(db)
    notifier = RecordingNotifier(**notifier_kwargs)
    controller = LifecycleController(
        store=ApplicationStore(db),
        catalog=RoleCatalog(db),
        scorer=ResumeScorer(None),
        storage=storage,
        notifier=notifier,
    )
    application = await controller.submit_application(role.id, form_data(), "cv.pdf", RESUME)

    updated = await controller.transition(admin, application.id, SHORTLISTED, "See you Monday")

    assert updated.status == SHORTLISTED.value
    stored = await ApplicationStore(db).get_application(application.id)
    assert stored.status == SHORTLISTED.value


async def test_transition_message_is_passed_to_notifier(db, lifecycle, admin, notifier):
    role = await make_role(db)
    application = await lifecycle.submit_application(role.id, form_data(), "cv.pdf", RESUME)

    await lifecycle.transition(admin, application.id, REJECTED, "We filled the position.")

    assert notifier.sent[-1]["message"] == "We filled the position."
    assert notifier.sent[-1]["role_title"] == "Backend Intern"


async def test_deleted_role_shows_as_unknown(db, lifecycle, admin, notifier):
    role = await make_role(db)
    application = await lifecycle.submit_application(role.id, form_data(), "cv.pdf", RESUME)

    await RoleCatalog(db).delete_role(admin, role.id)
    await db.commit()

    stored = await ApplicationStore(db).get_application(application.id)
    assert stored.role_title == "unknown"
    assert stored.role_department == "unknown"

    await lifecycle.transition(admin, application.id, SHORTLISTED)
    assert notifier.sent[-1]["role_title"] == "unknown"
