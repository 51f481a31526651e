import numpy as np
import pytest

from sampler import ProsacSampler, UniformSampler
from utils.uniform_random_generator import UniformRandomGenerator


def test_unique_random_set():
    generator = UniformRandomGenerator(seed=0)
    for _ in range(50):
        sample = generator.generateUniqueRandomSet(5, max=9)
        assert len(set(sample)) == 5
        assert all(0 <= i <= 9 for i in sample)

    with pytest.raises(ValueError):
        generator.generateUniqueRandomSet(11, max=9)


def test_unique_random_set_skips_value():
    generator = UniformRandomGenerator(seed=1)
    for _ in range(20):
        sample = generator.generateUniqueRandomSet(4, max=4, to_skip=2)
        assert sorted(sample) == [0, 1, 3, 4]


def test_random_generator_is_reproducible():
    g1 = UniformRandomGenerator(seed=42)
    g2 = UniformRandomGenerator(seed=42)
    assert [g1.generateUniqueRandomSet(3, max=100) for _ in range(5)] ==\
        [g2.generateUniqueRandomSet(3, max=100) for _ in range(5)]
    assert g1.nextGaussian() == g2.nextGaussian()
    assert 2.0 <= g1.nextDouble(2.0, 3.0) < 3.0


def test_uniform_sampler():
    data = list(range(20))
    sampler = UniformSampler(data, UniformRandomGenerator(seed=3))
    assert sampler.initialized

    pool = [2, 4, 6, 8, 10]
    for _ in range(30):
        sample = sampler.sample(pool, 3)
        assert len(set(sample)) == 3
        assert set(sample) <= set(pool)
    assert sampler.sample(pool, 6) == []


def test_prosac_sorts_quality_scores():
    sampler = ProsacSampler([0.1, 0.9, 0.5, 0.7, 0.3], 2, 100, UniformRandomGenerator(seed=4))
    np.testing.assert_array_equal(sampler.sorted_indices, [1, 3, 2, 4, 0])
    # 第一个样本只包含质量最高的两个观测值
    assert sorted(sampler.sample(None, 2)) == [1, 3]

    ties = ProsacSampler(np.ones(6), 2, 100)
    np.testing.assert_array_equal(ties.sorted_indices, np.arange(6))


def test_prosac_pool_grows_with_iterations():
    quality_scores = np.linspace(1.0, 0.0, 50)
    sampler = ProsacSampler(quality_scores, 3, 200, UniformRandomGenerator(seed=5))
    assert sampler.subset_size == 3

    subset_sizes = []
    for _ in range(100):
        sample = sampler.sample(None, 3)
        assert len(set(sample)) == 3
        assert all(0 <= i < 50 for i in sample)
        subset_sizes.append(sampler.subset_size)

    assert subset_sizes == sorted(subset_sizes)
    assert subset_sizes[-1] > 3


def test_prosac_respects_termination_length():
    sampler = ProsacSampler(np.linspace(1.0, 0.0, 30), 2, 1000, UniformRandomGenerator(seed=6))
    sampler.setTerminationLength(5)
    for _ in range(500):
        sample = sampler.sample(None, 2)
        assert len(set(sample)) == 2
        assert all(0 <= i < 30 for i in sample)
    assert sampler.subset_size <= 5


def test_prosac_wrong_sample_size():
    sampler = ProsacSampler(np.ones(10), 3)
    assert sampler.sample(None, 2) == []
    assert not ProsacSampler(np.ones(2), 3).initialized
