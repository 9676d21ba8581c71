import itertools

from domain.common.exceptions import MissingPackage, PackageConflict
from domain.proto.entity import InterfaceFile
from domain.validation.service import ValidationSession, Validator
from shared.codes import DiagnosticCode


def _visit_all(files):
    validator = Validator()
    for f in files:
        validator.visit(f)
    return validator


def test_same_package_in_directory_passes():
    files = [
        InterfaceFile("foo/a.proto", "pkg"),
        InterfaceFile("foo/b.proto", "pkg"),
        InterfaceFile("bar/c.proto", "other"),
    ]
    validator = _visit_all(files)
    assert not validator.failed
    assert all(validator.is_valid(f) for f in files)


def test_conflicting_package_names_directory_and_both_packages():
    validator = _visit_all([
        InterfaceFile("foo/bar.proto", "pkg"),
        InterfaceFile("foo/baz.proto", "pkg2"),
    ])
    assert validator.failed
    [diag] = validator.diagnostics
    assert isinstance(diag, PackageConflict)
    assert diag.code == DiagnosticCode.PACKAGE_CONFLICT
    assert diag.directory == "foo"
    assert {diag.existing, diag.conflicting} == {"pkg", "pkg2"}
    assert "foo" in diag.message and "pkg" in diag.message and "pkg2" in diag.message
    assert diag.path == "foo/baz.proto"


def test_every_file_in_conflicting_directory_is_excluded():
    bar = InterfaceFile("foo/bar.proto", "pkg")
    baz = InterfaceFile("foo/baz.proto", "pkg2")
    ok = InterfaceFile("other/x.proto", "pkg")
    validator = _visit_all([bar, baz, ok])
    assert not validator.is_valid(bar)
    assert not validator.is_valid(baz)
    assert validator.is_valid(ok)


def test_first_seen_package_stays_canonical():
    validator = _visit_all([
        InterfaceFile("foo/a.proto", "a"),
        InterfaceFile("foo/b.proto", "b"),
        InterfaceFile("foo/c.proto", "b"),
    ])
    assert validator.session.dir_to_package["foo"] == "a"
    assert [d.conflicting for d in validator.diagnostics] == ["b", "b"]


def test_conflict_detection_is_order_independent():
    files = [
        InterfaceFile("foo/a.proto", "a"),
        InterfaceFile("foo/b.proto", "b"),
        InterfaceFile("foo/c.proto", "a"),
        InterfaceFile("bar/d.proto", "d"),
    ]
    outcomes = set()
    for order in itertools.permutations(files):
        validator = _visit_all(order)
        outcomes.add((
            validator.failed,
            frozenset(validator.session.conflicting_directories()),
            frozenset(f.path for f in files if validator.is_valid(f)),
        ))
    assert outcomes == {(True, frozenset({"foo"}), frozenset({"bar/d.proto"}))}


def test_top_level_files_share_the_dot_directory():
    validator = _visit_all([
        InterfaceFile("a.proto", "one"),
        InterfaceFile("b.proto", "two"),
    ])
    [diag] = validator.diagnostics
    assert diag.directory == "."


def test_missing_package_is_reported_and_excluded():
    f = InterfaceFile("foo/nopkg.proto", None)
    validator = _visit_all([f])
    [diag] = validator.diagnostics
    assert isinstance(diag, MissingPackage)
    assert diag.path == "foo/nopkg.proto"
    assert not validator.is_valid(f)


def test_empty_package_counts_as_missing():
    f = InterfaceFile("foo/empty.proto", "")
    assert f.package is None
    validator = _visit_all([f])
    assert isinstance(validator.diagnostics[0], MissingPackage)


def test_missing_package_does_not_take_part_in_directory_check():
    validator = _visit_all([
        InterfaceFile("foo/nopkg.proto", None),
        InterfaceFile("foo/a.proto", "pkg"),
    ])
    assert [type(d) for d in validator.diagnostics] == [MissingPackage]
    assert validator.session.dir_to_package == {"foo": "pkg"}


def test_errors_accumulate_across_files():
    validator = _visit_all([
        InterfaceFile("foo/a.proto", "a"),
        InterfaceFile("foo/b.proto", "b"),
        InterfaceFile("bar/c.proto", None),
        InterfaceFile("baz/d.proto", "d"),
    ])
    assert [type(d) for d in validator.diagnostics] == [PackageConflict, MissingPackage]


def test_sessions_do_not_leak_between_validators():
    first = Validator()
    first.visit(InterfaceFile("foo/a.proto", "a"))
    second = Validator()
    second.visit(InterfaceFile("foo/b.proto", "b"))
    assert not second.failed
    assert isinstance(second.session, ValidationSession)
    assert second.session is not first.session
