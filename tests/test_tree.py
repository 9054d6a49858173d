import numpy as np
import pytest

from fractal_tree import (
    AttractionPoint,
    FractalTree,
    InvalidEnvelopeError,
    Plane,
    TreeNode,
    Vector,
    box_envelope,
    crown_envelope,
)
from fractal_tree.envelope import is_inside_envelope


def make_root(z_dir=1.0):
    return TreeNode(Vector(0, 0, 0), Vector(0, 0, z_dir))


@pytest.fixture
def stem_tree(quiet_config, rng):
    """Attractors packed around (0, 0, 2): the stem stops after two steps."""
    envelope = box_envelope(0.05, center=Vector(0, 0, 2))
    return FractalTree(make_root(), envelope, quiet_config(num_attractors=20), rng=rng)


def test_rejects_non_positive_attractor_count(quiet_config, unit_box):
    with pytest.raises(ValueError):
        FractalTree(make_root(), unit_box, quiet_config(num_attractors=0))


@pytest.mark.parametrize("rmin, rmax", [(0.0, 0.1), (0.2, 0.1), (0.1, 0.1)])
def test_rejects_bad_radii(quiet_config, unit_box, rmin, rmax):
    with pytest.raises(ValueError):
        FractalTree(make_root(), unit_box, quiet_config(rmin=rmin, rmax=rmax))


def test_rejects_root_with_parent(quiet_config, unit_box):
    root = TreeNode(Vector(), Vector(0, 0, 1), parent=0)
    with pytest.raises(ValueError):
        FractalTree(root, unit_box, quiet_config())


@pytest.mark.parametrize("direction", [Vector(0, 0, 0), Vector(0, 0, 2), Vector(float('nan'), 0, 0)])
def test_rejects_non_unit_root_direction(quiet_config, unit_box, direction):
    root = TreeNode(Vector(), direction)
    with pytest.raises(ValueError):
        FractalTree(root, unit_box, quiet_config())


def test_rejects_boolean_attractor_count(quiet_config, unit_box):
    with pytest.raises(ValueError):
        FractalTree(make_root(), unit_box, quiet_config(num_attractors=True))


def test_accepts_numpy_attractor_count(quiet_config, rng):
    tree = FractalTree(make_root(), box_envelope(0.05), quiet_config(num_attractors=np.int64(5)), rng=rng)
    assert len(tree.attractors) == 5


def test_proceeds_with_fewer_attractors_than_requested(quiet_config, rng, capsys):
    config = quiet_config(num_attractors=10, max_sampling_iterations=3)
    tree = FractalTree(make_root(), box_envelope(0.05), config, rng=rng)

    assert len(tree.attractors) == 3
    assert tree.sampling_iterations == 3
    assert "Warning: Only 3 of 10 attractors" in capsys.readouterr().out
    assert not tree.is_completed()

    tree.grow()
    assert tree.is_completed()


def test_no_accepted_attractors_completes_at_once(quiet_config, rng, capsys):
    config = quiet_config(num_attractors=10, max_sampling_iterations=0)
    tree = FractalTree(make_root(), box_envelope(0.05, center=Vector(0, 0, 50)), config, rng=rng)

    assert "Warning: Only 0 of 10 attractors" in capsys.readouterr().out
    assert tree.attractors == []
    assert tree.stem_length == 0
    assert len(tree.nodes) == 1
    assert tree.is_completed()
    assert tree.grow() is False
    assert len(tree.nodes) == 1


def test_rejects_empty_envelope(quiet_config):
    planes = [Plane(Vector(0, 0, 1), 1), Plane(Vector(0, 0, -1), 1)]
    with pytest.raises(InvalidEnvelopeError):
        FractalTree(make_root(), planes, quiet_config())


def test_attractors_inside_box(quiet_config, unit_box, rng):
    tree = FractalTree(make_root(), unit_box, quiet_config(num_attractors=10, max_stem_steps=3), rng=rng)
    assert len(tree.attractors) == 10
    for a in tree.attractors:
        assert all(-1 <= c <= 1 for c in a.pos.to_tuple())


def test_attractors_inside_crown(quiet_config, rng):
    envelope = crown_envelope()
    tree = FractalTree(make_root(), envelope, quiet_config(num_attractors=200), rng=rng)
    assert all(is_inside_envelope(envelope, a.pos) for a in tree.attractors)


def test_stem_grows_straight_until_in_range(stem_tree):
    zs = [node.pos.z for node in stem_tree.nodes]
    assert zs == [0.0, 1.0, 2.0]
    assert all(node.pos.x == 0.0 and node.pos.y == 0.0 for node in stem_tree.nodes)
    assert stem_tree.stem_length == 2
    assert [node.parent for node in stem_tree.nodes] == [None, 0, 1]


def test_stem_respects_step_limit(quiet_config, rng):
    # Attractors lie off to the side of the ray
    envelope = box_envelope(0.5, center=Vector(5, 0, 0))
    tree = FractalTree(make_root(), envelope, quiet_config(num_attractors=5, max_stem_steps=4), rng=rng)
    zs = [node.pos.z for node in tree.nodes]
    assert zs == [0.0, 1.0, 2.0, 3.0, 4.0]


def test_root_is_first_node(stem_tree):
    assert stem_tree.root is stem_tree.nodes[0]
    assert stem_tree.root.parent is None
    assert stem_tree.root.is_root
    assert not stem_tree.nodes[1].is_root
    assert stem_tree.parent_of(stem_tree.root) is None
    assert stem_tree.parent_of(stem_tree.nodes[2]) is stem_tree.nodes[1]


def test_single_attractor_in_kill_radius(quiet_config, rng):
    envelope = box_envelope(0.05)
    tree = FractalTree(make_root(), envelope, quiet_config(num_attractors=1), rng=rng)
    assert len(tree.nodes) == 1
    assert not tree.is_completed()

    assert tree.grow() is True
    assert tree.is_completed()
    assert len(tree.nodes) == 1
    assert tree.root.count == 0


def test_grow_after_completion_is_noop(quiet_config, rng):
    tree = FractalTree(make_root(), box_envelope(0.05), quiet_config(num_attractors=1), rng=rng)
    tree.grow()
    nodes = list(tree.nodes)
    assert tree.grow() is False
    assert tree.nodes == nodes
    assert tree.iteration == 1


def test_force_places_child_at_blended_direction(stem_tree):
    tree = stem_tree
    tree.attractors = [AttractionPoint(Vector(1, 0, 2), weight=0.5)]

    tree.grow()

    assert len(tree.nodes) == 4
    child = tree.nodes[3]
    assert child.parent == 2
    assert child.pos == Vector(0.25, 0, 2.5)
    assert child.dir == Vector(0.25, 0, 0.5)
    assert child.original_dir == Vector(0.25, 0, 0.5)
    assert child.count == 0
    assert child.force.mag_sq() == 0.0

    tip = tree.nodes[2]
    assert tip.dir == Vector(0, 0, 1)
    assert tip.count == 0
    assert tip.force.mag_sq() == 0.0


def test_more_contributors_shorten_the_step(stem_tree):
    tree = stem_tree
    tree.attractors = [
        AttractionPoint(Vector(1, 0, 2), weight=0.0),
        AttractionPoint(Vector(-1, 0, 2), weight=0.0),
    ]

    tree.grow()

    child = tree.nodes[-1]
    assert child.pos == Vector(0, 0, 2 + 1 / 3)


def test_attractor_killed_by_any_node_within_rmin(stem_tree):
    tree = stem_tree
    far = AttractionPoint(Vector(0, 3, 2), weight=0.2)
    near_stem = AttractionPoint(Vector(0.1, 0, 1), weight=0.2)
    tree.attractors = [near_stem, far]

    tree.grow()

    assert tree.attractors == [far]
    assert near_stem.reached
    # only the far attractor pulled, on the tip
    assert len(tree.nodes) == 4
    assert tree.nodes[3].parent == 2


def test_distant_attractor_still_pulls(stem_tree):
    tree = stem_tree
    tree.attractors = [AttractionPoint(Vector(0, 0, 50), weight=0.2)]
    tree.grow()
    assert len(tree.nodes) == 4
    assert tree.nodes[3].pos.z > 2


def test_growth_properties(quiet_config):
    tree = FractalTree(
        make_root(), crown_envelope(), quiet_config(num_attractors=150), rng=np.random.default_rng(3)
    )
    history = [(node.pos.to_tuple(), node.parent) for node in tree.nodes]
    remaining = len(tree.attractors)
    completed = tree.is_completed()

    for _ in range(40):
        tree.grow()

        assert len(tree.attractors) <= remaining
        remaining = len(tree.attractors)

        assert len(tree.nodes) >= len(history)
        assert [(n.pos.to_tuple(), n.parent) for n in tree.nodes[:len(history)]] == history
        history = [(node.pos.to_tuple(), node.parent) for node in tree.nodes]

        if completed:
            assert tree.is_completed()
        completed = tree.is_completed()

    for k, node in enumerate(tree.nodes):
        assert node.index == k
        if k > 0:
            assert node.parent < k


def test_same_seed_same_tree(quiet_config):
    def build():
        tree = FractalTree(
            make_root(), crown_envelope(), quiet_config(num_attractors=100), rng=np.random.default_rng(11)
        )
        for _ in range(10):
            tree.grow()
        return [node.pos.to_tuple() for node in tree.nodes]

    assert build() == build()


def test_grow_to_completion_with_callback(quiet_config, rng):
    tree = FractalTree(make_root(), box_envelope(0.05), quiet_config(num_attractors=1), rng=rng)
    calls = []
    iterations = tree.grow_to_completion(callback=lambda t, i: calls.append(i))
    assert iterations == 1
    assert calls == [1]
    assert tree.is_completed()


def test_grow_to_completion_respects_limit(quiet_config):
    tree = FractalTree(
        make_root(), crown_envelope(), quiet_config(num_attractors=300), rng=np.random.default_rng(5)
    )
    assert tree.grow_to_completion(max_iterations=3) == 3
    assert tree.iteration == 3


def test_segments_tips_and_depth(stem_tree):
    tree = stem_tree
    tree.attractors = [
        AttractionPoint(Vector(0, 1, 0), weight=0.2),
        AttractionPoint(Vector(0, 0, 3.5), weight=0.2),
    ]
    tree.grow()

    segments = tree.get_segments()
    assert len(segments) == len(tree.nodes) - 1
    assert segments[0] == ((0.0, 0.0, 0.0), (0.0, 0.0, 1.0))

    tips = tree.tips
    assert tree.nodes[0] not in tips
    assert all(node.index >= 3 for node in tips)
    assert max(tree.depth(node) for node in tips) == 3


def test_from_config(quiet_config):
    config = quiet_config(num_attractors=50, random_seed=42)
    tree = FractalTree.from_config(config)
    assert tree.root.pos == Vector(0, 0, 0)
    assert tree.root.dir == Vector(0, 0, 1)
    assert len(tree.envelope) == 6
    assert len(tree.attractors) == 50

    again = FractalTree.from_config(config)
    assert [a.pos.to_tuple() for a in again.attractors] == [a.pos.to_tuple() for a in tree.attractors]
