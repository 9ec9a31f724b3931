import pytest

from absence_api.core.auth_service import Caller
from absence_api.core.enums import Role
from absence_api.core.errors import Forbidden, ValidationError
from absence_api.core.policy import AccessPolicy, Operation, Resource
from absence_api.crud import absence as crud_absence
from absence_api.crud import justification as crud_justification
from absence_api.crud import seance as crud_seance


@pytest.fixture
def policy(db):
    return AccessPolicy(db)


def _ids(rows):
    return sorted(r.id for r in rows)


def test_admin_sees_everything(db, policy, school, caller_for):
    scope = policy.authorize(caller_for(school.admin), Resource.ABSENCE, Operation.READ)
    assert scope.predicate is None
    assert _ids(crud_absence.list_absences(db, where=scope.predicate)) == _ids([school.a1, school.a2])


def test_professor_only_lists_absences_of_own_sessions(db, policy, school, caller_for):
    for prof_user, own in ((school.p1_user, school.a1), (school.p2_user, school.a2)):
        scope = policy.authorize(caller_for(prof_user), Resource.ABSENCE, Operation.READ)
        rows = crud_absence.list_absences(db, where=scope.predicate)
        assert _ids(rows) == [own.id]
        assert all(r.seance.enseignant_id == prof_user.enseignant_id for r in rows)


def test_professor_only_lists_own_sessions(db, policy, school, caller_for):
    scope = policy.authorize(caller_for(school.p1_user), Resource.SEANCE, Operation.READ)
    assert _ids(crud_seance.list_seances(db, where=scope.predicate)) == [school.s1.id]


def test_student_sessions_are_those_of_own_class(db, policy, school, caller_for):
    scope = policy.authorize(caller_for(school.e2_user), Resource.SEANCE, Operation.READ)
    assert _ids(crud_seance.list_seances(db, where=scope.predicate)) == [school.s2.id]


def test_student_only_lists_own_justifications(db, policy, school, caller_for):
    scope = policy.authorize(caller_for(school.e1_user), Resource.JUSTIFICATION, Operation.READ)
    rows = crud_justification.list_justifications(db, where=scope.predicate)
    assert _ids(rows) == [school.j1.id]
    assert all(r.absence.etudiant_id == school.e1.id for r in rows)


def test_professor_without_linked_record_sees_nothing(db, policy, school):
    orphan = Caller(id=999, email="orphelin@ecole.fr", role=Role.PROFESSOR)
    scope = policy.authorize(orphan, Resource.ABSENCE, Operation.READ)
    assert scope.allowed
    assert crud_absence.list_absences(db, where=scope.predicate) == []


def test_professor_record_scope(policy, school, caller_for):
    prof = caller_for(school.p1_user)
    assert policy.scope(prof, Resource.ABSENCE, Operation.UPDATE, school.a1).allowed
    assert not policy.scope(prof, Resource.ABSENCE, Operation.UPDATE, school.a2).allowed
    with pytest.raises(Forbidden):
        policy.authorize(prof, Resource.ABSENCE, Operation.DELETE, school.a2)


def test_professor_sees_only_own_teacher_record(policy, school, caller_for):
    prof = caller_for(school.p1_user)
    assert policy.scope(prof, Resource.ENSEIGNANT, Operation.READ, school.p1).allowed
    assert not policy.scope(prof, Resource.ENSEIGNANT, Operation.READ, school.p2).allowed


@pytest.mark.parametrize(
    "resource,operation",
    [
        (Resource.ETUDIANT, Operation.READ),
        (Resource.ENSEIGNANT, Operation.READ),
        (Resource.ABSENCE, Operation.CREATE),
        (Resource.CLASSE, Operation.CREATE),
        (Resource.JUSTIFICATION, Operation.VALIDATE),
    ],
)
def test_student_denied_by_role(policy, school, resource, operation, caller_for):
    with pytest.raises(Forbidden):
        policy.authorize(caller_for(school.e1_user), resource, operation)


def test_professor_cannot_validate_or_write_reference_data(policy, school, caller_for):
    prof = caller_for(school.p1_user)
    assert not policy.permits(prof, Resource.JUSTIFICATION, Operation.VALIDATE)
    assert not policy.permits(prof, Resource.SEANCE, Operation.CREATE)
    assert policy.permits(prof, Resource.ABSENCE, Operation.CREATE)


def test_candidate_parent_must_be_in_scope(policy, school, caller_for):
    prof = caller_for(school.p1_user)
    policy.authorize_candidate(prof, Resource.ABSENCE, {"seance_id": school.s1.id})
    with pytest.raises(Forbidden):
        policy.authorize_candidate(prof, Resource.ABSENCE, {"seance_id": school.s2.id})

    student = caller_for(school.e1_user)
    policy.authorize_candidate(student, Resource.JUSTIFICATION, {"absence_id": school.a1.id})
    with pytest.raises(Forbidden):
        policy.authorize_candidate(student, Resource.JUSTIFICATION, {"absence_id": school.a2.id})


def test_candidate_with_missing_parent_is_invalid(policy, school, caller_for):
    with pytest.raises(ValidationError):
        policy.authorize_candidate(caller_for(school.p1_user), Resource.ABSENCE, {"seance_id": 999})
    with pytest.raises(ValidationError):
        policy.authorize_candidate(caller_for(school.e1_user), Resource.JUSTIFICATION, {"absence_id": 999})


def test_filter_applies_read_predicate(db, policy, school, caller_for):
    from absence_api.db.models import Absence

    query = policy.filter(db.query(Absence), caller_for(school.e2_user), Resource.ABSENCE)
    assert _ids(query.all()) == [school.a2.id]
