import logging

import numpy as np
import pytest

from tessera.algorithms.sampling import PoissonSampler, separation_radius

FIXTURE_ARGS = dict(
    n=20,
    extent=[[0., 1.], [0., 1.]],
    periodic=False,
    seed=42,
)


@pytest.fixture
def sampler():
    return PoissonSampler(**FIXTURE_ARGS)


def scripted_source(deviates):
    """Random source replaying fixed deviates.

    """
    return iter(deviates).__next__


@pytest.mark.parametrize(
    "volume,n,dims,radius",
    [
        (1., 10, 2, np.sqrt(0.06169)),
        (2., 1, 1, 1.2338),
        (8., 100, 3, (0.6169 * 8. / 100) ** (1/3)),
    ]
)
def test_separation_radius(volume, n, dims, radius):
    assert separation_radius(volume, n, dims) == pytest.approx(radius), \
        "Incorrect separation radius."


class TestPoissonSampler:

    def test_fill(self, sampler):
        points = sampler.fill()
        assert points.shape == (20, 2), "Incorrect number of points."
        assert np.all((points >= 0.) & (points < 1.)), \
            "Points fall outside the extent."
        assert sampler.next() is None, \
            "Sampler does not signal exhaustion after `n` points."
        assert len(sampler) == 20, "Sampler exceeds `n` points."

    def test_next(self, sampler):
        for count in range(1, sampler.n + 1):
            point = sampler.next()
            assert point.shape == (2,), "Incorrect point dimensionality."
            assert len(sampler) == count, "Point set grows irregularly."
        assert sampler.next() is None, \
            "Sampler does not signal exhaustion after `n` points."

    def test_next_returns_copy(self, sampler):
        point = sampler.next()
        point += 10.
        assert np.all(sampler.points[0] < 1.), \
            "Returned point shares memory with the point set."

    @pytest.mark.parametrize(
        "kwargs",
        [
            dict(n=15, dims=2, seed=7),
            dict(n=15, dims=3, periodic=True, seed=7),
            dict(n=8, extent=[0., 5.], periodic=[True], seed=0),
        ]
    )
    def test_reproducibility(self, kwargs):
        assert np.array_equal(
            PoissonSampler(**kwargs).fill(), PoissonSampler(**kwargs).fill()
        ), "Identically seeded samplers produce different point sets."

    def test_unwrapped_1d_extent(self):
        sampler = PoissonSampler(10, extent=[2., 3.], seed=1)
        points = sampler.fill()
        assert points.shape == (10, 1), "Incorrect 1-d point set shape."
        assert np.all((points >= 2.) & (points < 3.)), \
            "Points fall outside the 1-d extent."

    def test_default_extent(self):
        points = PoissonSampler(10, dims=3, seed=1).fill()
        assert np.all((points >= -1.) & (points < 1.)), \
            "Points fall outside the default extent."

    def test_immediate_acceptance(self):
        sampler = PoissonSampler(
            2, extent=[0., 1.], tries=3,
            random_source=scripted_source([0.5, 0.6, 0.9])
        )
        assert sampler.fill()[:, 0] == pytest.approx([0.5, 0.9]), \
            "Candidate beyond the radius is not accepted immediately."

    def test_best_candidate_fallback(self):
        sampler = PoissonSampler(
            2, extent=[0., 1.], tries=3,
            random_source=scripted_source([0.5, 0.6, 0.3, 0.7, 0.1])
        )
        assert sampler.fill()[:, 0] == pytest.approx([0.5, 0.3]), \
            "Farthest candidate is not accepted after all tries."

    def test_degenerate_source(self, caplog):
        sampler = PoissonSampler(
            5, dims=2, tries=4, random_source=lambda: 0.5
        )
        with caplog.at_level(logging.DEBUG, logger='PoissonSampler'):
            points = sampler.fill()
        assert points.shape == (5, 2), \
            "Sampler fails to fill with a degenerate random source."
        assert "No candidate beyond radius" in caplog.text, \
            "Fallback acceptance is not logged."

    def test_fill_progress(self, caplog):
        logger = logging.getLogger('test_fill_progress')
        with caplog.at_level(logging.INFO, logger='test_fill_progress'):
            PoissonSampler(8, dims=2, seed=3).fill(logger=logger)
        assert "100% computed" in caplog.text, "Progress is not reported."

    def test_add_point(self, sampler):
        sampler.add_point([0.5, 0.5])
        assert np.allclose(sampler.points, [[0.5, 0.5]]), \
            "Point is not added."
        assert len(sampler.fill()) == sampler.n, \
            "Incorrect number of points after manual addition."

    def test_add_point_scalar_1d(self):
        sampler = PoissonSampler(3, extent=[0., 1.])
        sampler.add_point(0.25)
        assert np.allclose(sampler.points, [[0.25]]), \
            "Scalar point is not added in 1-d."

    @pytest.mark.parametrize("point", [[0.5], [0.5, 0.5, 0.5], 0.5])
    def test_add_point_dimension_mismatch(self, sampler, point):
        with pytest.raises(ValueError):
            sampler.add_point(point)
        assert len(sampler) == 0, "Rejected point modifies the point set."

    def test_add_point_full(self, sampler):
        sampler.fill()
        with pytest.raises(ValueError):
            sampler.add_point([0.5, 0.5])

    def test_reset(self, sampler):
        radius, first_batch = sampler.radius, sampler.fill()
        sampler.reset()
        assert len(sampler) == 0, "Point set is not cleared."
        assert sampler.radius == radius, "Configuration is not preserved."
        second_batch = sampler.fill()
        assert second_batch.shape == first_batch.shape, \
            "Incorrect number of points after reset."
        assert not np.array_equal(first_batch, second_batch), \
            "Sampler repeats the same batch after reset."

    @pytest.mark.parametrize(
        "periodic,distance",
        [
            (True, 0.1),
            (False, 0.9),
            ([False, True], 0.9),
        ]
    )
    def test_pairwise_distances(self, periodic, distance):
        sampler = PoissonSampler(2, extent=[[0., 1.], [0., 1.]],
                                 periodic=periodic)
        sampler.add_point([0.05, 0.5])
        sampler.add_point([0.95, 0.5])
        assert sampler.pairwise_distances() == pytest.approx([distance]), \
            "Incorrect pairwise distances."

    def test_periodic_separation(self):
        sampler = PoissonSampler(
            2, extent=[0., 1.], periodic=True, tries=2,
            random_source=scripted_source([0.05, 0.95, 0.5])
        )
        assert sampler.fill()[:, 0] == pytest.approx([0.05, 0.5]), \
            "Periodic wrap is ignored when rejecting candidates."

    def test_high_dimension_warning(self):
        with pytest.warns(RuntimeWarning):
            PoissonSampler(10, dims=4, seed=0)

    def test_invalid_random_source(self):
        with pytest.raises(TypeError):
            PoissonSampler(10, dims=2, random_source=0.5)

    @pytest.mark.parametrize(
        "kwargs",
        [
            dict(n=0, dims=2),
            dict(n=5),
            dict(n=5, dims=2, extent=[[0., 1.]]),
            dict(n=5, dims=2, periodic=[True, False, True]),
        ]
    )
    def test_invalid_configuration(self, kwargs):
        with pytest.raises(ValueError):
            PoissonSampler(**kwargs)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(n=20, extent=[[0., 1.], [0., 1.]]),
        dict(n=20, extent=[[0., 1.], [0., 1.]], periodic=True),
        dict(n=10, extent=[0., 1.]),
    ]
)
def test_separation_fraction(kwargs):
    fractions = [_separation_fraction(seed, kwargs) for seed in range(10)]
    assert np.mean(fractions) >= 0.95, \
        "Too many point pairs are closer than the separation radius."


@pytest.mark.slow
@pytest.mark.parametrize(
    "kwargs",
    [
        dict(n=200, extent=[[0., 2.], [0., 1.]], periodic=True),
        dict(n=100, extent=[[0., 1.], [0., 1.], [0., 1.]]),
    ]
)
def test_separation_fraction_large(kwargs):
    fractions = [_separation_fraction(seed, kwargs) for seed in range(20)]
    assert np.mean(fractions) >= 0.95, \
        "Too many point pairs are closer than the separation radius."


def _separation_fraction(seed, kwargs):

    sampler = PoissonSampler(seed=seed, **kwargs)
    sampler.fill()

    return sampler.separation_fraction()
