"""Tests for PartnershipMaterializer."""

import pytest

from src.marketplace.core.exceptions import NotFoundError
from src.marketplace.models import Partnership, PartnershipStatus
from tests.factories import (
    PartnershipFactory,
    ProjectApplicationFactory,
    ProjectFactory,
    generate_uuid,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def project(store):
    project = ProjectFactory.build(organizer_id=generate_uuid())
    store.seed(project)
    return project


@pytest.fixture
def application(project):
    return ProjectApplicationFactory.approved(
        project_id=project.id,
        user_id=generate_uuid(),
        organization_id=generate_uuid(),
        partnership_type="monetary",
    )


async def test_inserts_active_partnership(marketplace, store, application):
    partnership = await marketplace.materializer.materialize(application)

    assert partnership.status == PartnershipStatus.ACTIVE.value
    assert partnership.project_id == application.project_id
    assert partnership.partner_id == application.user_id
    assert partnership.organization_id == application.organization_id
    assert partnership.partnership_type == "monetary"
    assert store.all(Partnership) == [partnership]


async def test_flushes_without_committing(marketplace, application):
    await marketplace.materializer.materialize(application)

    assert marketplace.session.commits == 0
    assert marketplace.session.pending == []


async def test_materializing_twice_keeps_one_row(marketplace, store, application):
    first = await marketplace.materializer.materialize(application)
    second = await marketplace.materializer.materialize(application)

    assert first is second
    assert len(store.all(Partnership)) == 1


@pytest.mark.parametrize(
    "status",
    [PartnershipStatus.PENDING, PartnershipStatus.REJECTED, PartnershipStatus.ACTIVE],
)
async def test_existing_row_becomes_active(marketplace, store, application, status):
    existing = PartnershipFactory.build(
        project_id=application.project_id,
        partner_id=application.user_id,
        status=status.value,
    )
    store.seed(existing)

    partnership = await marketplace.materializer.materialize(application)

    assert partnership is existing
    assert existing.status == PartnershipStatus.ACTIVE.value
    assert len(store.all(Partnership)) == 1


async def test_legacy_duplicates_update_newest(marketplace, store, application):
    older = PartnershipFactory.build(
        project_id=application.project_id,
        partner_id=application.user_id,
        status=PartnershipStatus.PENDING.value,
    )
    newer = PartnershipFactory.build(
        project_id=application.project_id,
        partner_id=application.user_id,
        status=PartnershipStatus.PENDING.value,
    )
    store.seed(older, newer)

    partnership = await marketplace.materializer.materialize(application)

    assert partnership is newer
    assert len(store.all(Partnership)) == 2


async def test_missing_project(marketplace):
    application = ProjectApplicationFactory.approved(
        project_id=generate_uuid(), user_id=generate_uuid()
    )

    with pytest.raises(NotFoundError):
        await marketplace.materializer.materialize(application)
