import pytest

from filterway.errors import Error, ErrorKind, Rejection


class Oops:
    pass


class Nope:
    pass


def test_error_displays_as_its_cause():
    cause = OSError("disk gone")
    err = Error(ErrorKind.MULTIPART, cause)
    assert str(err) == str(cause)
    assert repr(err) == repr(cause)


def test_error_keeps_kind_and_cause():
    cause = ValueError("bad frame")
    err = Error(ErrorKind.WS, cause)
    assert err.kind is ErrorKind.WS
    assert err.cause is cause
    assert err.__cause__ is cause


def test_error_can_be_raised_and_caught():
    cause = RuntimeError("connection reset")
    with pytest.raises(Error) as info:
        raise Error(ErrorKind.HYPER, cause)
    assert info.value.cause is cause


def test_error_rejects_non_kind():
    with pytest.raises(TypeError):
        Error("hyper", ValueError("x"))


def test_empty_rejection_is_not_found():
    assert Rejection().is_not_found is True
    assert Rejection(Oops()).is_not_found is False


def test_find_returns_matching_cause():
    oops = Oops()
    rejection = Rejection(oops)
    assert rejection.find(Oops) is oops
    assert rejection.find(Nope) is None


def test_combine_keeps_reasons_of_both():
    oops, nope = Oops(), Nope()
    combined = Rejection(nope).combine(Rejection(oops))
    assert combined.causes == (nope, oops)
    assert combined.find(Oops) is oops
    assert combined.find(Nope) is nope


def test_combine_with_not_found_keeps_reason():
    oops = Oops()
    combined = Rejection().combine(Rejection(oops))
    assert combined.causes == (oops,)
    assert not combined.is_not_found


def test_combine_requires_rejection():
    with pytest.raises(TypeError):
        Rejection().combine(ValueError("x"))


def test_rejection_is_raisable_and_iterable():
    oops = Oops()
    with pytest.raises(Rejection) as info:
        raise Rejection(oops)
    assert list(info.value) == [oops]


def test_rejection_equality_by_causes():
    oops = Oops()
    assert Rejection(oops) == Rejection(oops)
    assert Rejection() == Rejection()
    assert not (Rejection(oops) == Rejection())