import elasticarray

import numpy as np


class Append:
    params = [[(8,), (16, 16)], [1, 64]]
    param_names = ["kernel", "pages"]

    def setup(self, kernel, pages):
        rng = np.random.default_rng(0)
        self.block = rng.random(kernel + (pages,))
        self.kernel = kernel

    def time_append(self, kernel, pages):
        a = elasticarray.empty(kernel + (0,))
        for _ in range(100):
            a.append(self.block)

    def time_prepend(self, kernel, pages):
        a = elasticarray.empty(kernel + (0,))
        for _ in range(100):
            a.prepend(self.block)


class Resize:
    def setup(self):
        self.a = elasticarray.zeros((16, 16, 1000))

    def time_shrink_grow(self):
        for n in range(1000, 0, -10):
            self.a.resize(16, 16, n)
        self.a.resize(16, 16, 1000)


class Shape:
    def setup(self):
        self.a = elasticarray.zeros((4, 5, 6, 1000))

    def time_shape(self):
        for _ in range(1000):
            self.a.shape
