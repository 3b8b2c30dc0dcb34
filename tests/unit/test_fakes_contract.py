"""The in-memory repositories expose exactly the queries the SQL repositories do."""

import inspect

import pytest

from src.marketplace import repositories
from tests import fakes

pytestmark = pytest.mark.unit

# Internal query helper shared by the SQL repositories; fakes page in Python.
SQL_ONLY = {"paginate"}

PAIRS = [
    (repositories.UserRepository, fakes.FakeUserRepository),
    (repositories.ProjectRepository, fakes.FakeProjectRepository),
    (repositories.OrganizationRepository, fakes.FakeOrganizationRepository),
    (repositories.OrganizationMemberRepository, fakes.FakeOrganizationMemberRepository),
    (repositories.PartnershipInterestRepository, fakes.FakePartnershipInterestRepository),
    (repositories.ProjectApplicationRepository, fakes.FakeProjectApplicationRepository),
    (repositories.JoinRequestRepository, fakes.FakeJoinRequestRepository),
    (
        repositories.PartnershipApplicationRepository,
        fakes.FakePartnershipApplicationRepository,
    ),
    (repositories.PartnershipRepository, fakes.FakePartnershipRepository),
    (repositories.NotificationRepository, fakes.FakeNotificationRepository),
    (repositories.SystemSettingRepository, fakes.FakeSystemSettingRepository),
]


def public_methods(cls: type) -> set[str]:
    return {
        name
        for name, member in inspect.getmembers(cls, inspect.isfunction)
        if not name.startswith("_")
    }


@pytest.mark.parametrize(("sql_repo", "fake_repo"), PAIRS, ids=lambda cls: cls.__name__)
def test_fake_matches_sql_repository(sql_repo, fake_repo):
    assert public_methods(fake_repo) == public_methods(sql_repo) - SQL_ONLY


def test_every_repository_has_a_fake():
    exported = {
        getattr(repositories, name)
        for name in repositories.__all__
        if name != "BaseRepository"
    }

    assert exported == {sql_repo for sql_repo, _ in PAIRS}


@pytest.mark.parametrize(
    "method",
    ["get_by_email", "list_members"],
)
def test_unused_lookups_stay_removed(method):
    assert not hasattr(repositories.UserRepository, method)
    assert not hasattr(repositories.OrganizationMemberRepository, method)
