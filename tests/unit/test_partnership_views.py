"""Tests for the reconciled partnership read model."""

from datetime import timedelta

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from src.marketplace.models import (
    PartnershipStatus,
    ProjectStatus,
    RequestStatus,
)
from src.marketplace.services.partnership_service import reconcile
from tests.factories import (
    PartnershipFactory,
    ProjectApplicationFactory,
    ProjectFactory,
    generate_uuid,
    utc_now,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def partner_id():
    return generate_uuid()


def _project(store, **kwargs):
    project = ProjectFactory.build(organizer_id=generate_uuid(), **kwargs)
    store.seed(project)
    return project


async def test_approved_application_without_partnership_row(marketplace, store, partner_id):
    """An approval whose partnership was never written still shows up as active."""
    project = _project(store)
    application = ProjectApplicationFactory.approved(project_id=project.id, user_id=partner_id)
    store.seed(application)

    views = await marketplace.views.partnerships_for(partner_id)

    assert len(views) == 1
    assert views[0].project_id == project.id
    assert views[0].status == PartnershipStatus.ACTIVE.value
    assert views[0].source == "application"
    assert views[0].project_title == project.title


async def test_partnership_row_wins_over_application(marketplace, store, partner_id):
    project = _project(store)
    partnership = PartnershipFactory.build(
        project_id=project.id, partner_id=partner_id, status=PartnershipStatus.PENDING.value
    )
    application = ProjectApplicationFactory.approved(project_id=project.id, user_id=partner_id)
    store.seed(partnership, application)

    views = await marketplace.views.partnerships_for(partner_id)

    assert len(views) == 1
    assert views[0].id == partnership.id
    assert views[0].source == "partnership"
    assert views[0].status == PartnershipStatus.PENDING.value


async def test_pending_and_rejected_applications_are_not_partnerships(
    marketplace, store, partner_id
):
    project = _project(store)
    store.seed(
        ProjectApplicationFactory.build(project_id=project.id, user_id=partner_id),
        ProjectApplicationFactory.build(
            project_id=project.id, user_id=partner_id, status=RequestStatus.REJECTED.value
        ),
    )

    assert await marketplace.views.partnerships_for(partner_id) == []


async def test_completed_project_overrides_status(marketplace, store, partner_id):
    completed = _project(store, status=ProjectStatus.COMPLETED.value, completed_at=utc_now())
    other_completed = _project(store, status=ProjectStatus.COMPLETED.value, completed_at=utc_now())
    store.seed(
        PartnershipFactory.build(
            project_id=completed.id,
            partner_id=partner_id,
            status=PartnershipStatus.REJECTED.value,
        ),
        ProjectApplicationFactory.approved(project_id=other_completed.id, user_id=partner_id),
    )

    views = await marketplace.views.partnerships_for(partner_id)

    assert {v.project_id for v in views} == {completed.id, other_completed.id}
    assert all(v.status == PartnershipStatus.COMPLETED.value for v in views)


async def test_legacy_duplicate_rows_collapse(marketplace, store, partner_id):
    project = _project(store)
    older = PartnershipFactory.build(project_id=project.id, partner_id=partner_id)
    newer = PartnershipFactory.build(project_id=project.id, partner_id=partner_id)
    store.seed(older, newer)

    views = await marketplace.views.partnerships_for(partner_id)

    assert [v.id for v in views] == [newer.id]


async def test_order_partnerships_first_then_applications_newest_first(
    marketplace, store, partner_id
):
    now = utc_now()
    projects = [_project(store) for _ in range(4)]
    p_old = PartnershipFactory.build(
        project_id=projects[0].id, partner_id=partner_id, created_at=now - timedelta(days=3)
    )
    p_new = PartnershipFactory.build(
        project_id=projects[1].id, partner_id=partner_id, created_at=now - timedelta(days=2)
    )
    a_old = ProjectApplicationFactory.approved(
        project_id=projects[2].id, user_id=partner_id, created_at=now - timedelta(days=1)
    )
    a_new = ProjectApplicationFactory.approved(
        project_id=projects[3].id, user_id=partner_id, created_at=now
    )
    store.seed(a_new, p_old, a_old, p_new)

    views = await marketplace.views.partnerships_for(partner_id)

    assert [v.id for v in views] == [p_new.id, p_old.id, a_new.id, a_old.id]


async def test_only_the_users_partnerships(marketplace, store, partner_id):
    project = _project(store)
    store.seed(PartnershipFactory.build(project_id=project.id, partner_id=generate_uuid()))

    assert await marketplace.views.partnerships_for(partner_id) == []


async def test_partners_for_project_one_per_partner(marketplace, store):
    project = _project(store)
    first, second = generate_uuid(), generate_uuid()
    store.seed(
        PartnershipFactory.build(project_id=project.id, partner_id=first),
        ProjectApplicationFactory.approved(project_id=project.id, user_id=first),
        ProjectApplicationFactory.approved(project_id=project.id, user_id=second),
        ProjectApplicationFactory.build(project_id=project.id, user_id=generate_uuid()),
    )

    views = await marketplace.views.partners_for_project(project.id)

    assert sorted(v.partner_id for v in views) == sorted([first, second])


# --- Property tests ---

_partnership_statuses = st.sampled_from([s.value for s in PartnershipStatus])
_request_statuses = st.sampled_from([s.value for s in RequestStatus])
_project_statuses = st.sampled_from([s.value for s in ProjectStatus])


@st.composite
def _histories(draw):
    """Random partnership rows and applications over a handful of projects."""
    partner_id = generate_uuid()
    project_statuses = draw(st.lists(_project_statuses, min_size=1, max_size=5))
    projects = {}
    for status in project_statuses:
        project = ProjectFactory.build(organizer_id=generate_uuid(), status=status)
        projects[project.id] = project
    project_ids = list(projects)

    base = utc_now()
    partnerships = [
        PartnershipFactory.build(
            project_id=draw(st.sampled_from(project_ids)),
            partner_id=partner_id,
            status=draw(_partnership_statuses),
            created_at=base - timedelta(minutes=i),
        )
        for i in range(draw(st.integers(0, 6)))
    ]
    applications = [
        ProjectApplicationFactory.build(
            project_id=draw(st.sampled_from(project_ids)),
            user_id=partner_id,
            status=draw(_request_statuses),
            created_at=base - timedelta(minutes=i),
        )
        for i in range(draw(st.integers(0, 6)))
    ]
    return partnerships, applications, projects


@settings(max_examples=50, deadline=None)
@given(_histories())
def test_never_two_entries_for_one_project(history):
    partnerships, applications, projects = history

    views = reconcile(partnerships, applications, projects)

    project_ids = [v.project_id for v in views]
    assert len(project_ids) == len(set(project_ids))


@settings(max_examples=50, deadline=None)
@given(_histories())
def test_completed_projects_always_report_completed(history):
    partnerships, applications, projects = history

    views = reconcile(partnerships, applications, projects)

    for view in views:
        if projects[view.project_id].status == ProjectStatus.COMPLETED.value:
            assert view.status == PartnershipStatus.COMPLETED.value


@settings(max_examples=50, deadline=None)
@given(_histories())
def test_every_partnership_project_is_covered(history):
    partnerships, applications, projects = history

    views = reconcile(partnerships, applications, projects)

    covered = {v.project_id for v in views}
    assert {p.project_id for p in partnerships} <= covered
    assert {
        a.project_id for a in applications if a.status == RequestStatus.APPROVED.value
    } <= covered
