from .sampler import Sampler
from .uniform_sampler import UniformSampler
from .prosac_sampler import ProsacSampler
