import pytest

from fractal_tree import InvalidEnvelopeError, Plane, Vector, box_envelope, crown_envelope, validate_envelope
from fractal_tree.envelope import interior_depth, is_inside_envelope


def test_box_envelope_contains_cube():
    planes = box_envelope(1.0)
    assert len(planes) == 6
    assert is_inside_envelope(planes, Vector(0.9, -0.9, 1.0))
    assert not is_inside_envelope(planes, Vector(0, 0, 1.1))


def test_box_envelope_with_center():
    planes = box_envelope(0.5, center=Vector(0, 0, 3))
    assert is_inside_envelope(planes, Vector(0.4, 0.4, 3.4))
    assert not is_inside_envelope(planes, Vector(0, 0, 2.4))


def test_valid_envelopes_pass():
    validate_envelope(box_envelope(1.0))
    validate_envelope(crown_envelope())


def test_interior_depth_of_box():
    assert interior_depth(box_envelope(2.0)) == pytest.approx(1.0)
    assert interior_depth(box_envelope(0.25)) == pytest.approx(0.25)


def test_empty_envelope_list():
    with pytest.raises(InvalidEnvelopeError):
        validate_envelope([])


def test_disjoint_half_spaces():
    planes = [Plane(Vector(0, 0, 1), 1), Plane(Vector(0, 0, -1), 1)]
    with pytest.raises(InvalidEnvelopeError):
        validate_envelope(planes)


def test_flat_intersection_has_no_interior():
    planes = [Plane(Vector(0, 0, 1), 0), Plane(Vector(0, 0, -1), 0)]
    with pytest.raises(InvalidEnvelopeError):
        validate_envelope(planes)


def test_zero_normal_rejected():
    planes = box_envelope(1.0) + [Plane(Vector(0, 0, 0), -1)]
    with pytest.raises(InvalidEnvelopeError):
        validate_envelope(planes)


def test_thin_box_is_valid():
    validate_envelope(box_envelope(1e-7))
    assert interior_depth(box_envelope(1e-7)) == pytest.approx(1e-7, rel=1e-3)
