import numpy as np

from . import _settings


class FlatBuffer:
    """
    A contiguous, growable one-dimensional storage block.

    The live elements occupy ``storage[head:head + length]``. Spare room is
    kept on both sides so that extending at either end is amortized O(1)
    per element; the storage is only reallocated when a side runs out.

    Parameters
    ----------
    length : int
        The initial number of live elements.
    dtype : numpy.dtype, optional
        The data type of the elements. Defaults to ``float64``.
    fill_value : scalar, optional
        The initial value of the live elements. If not given, they are left
        uninitialized.

    Examples
    --------
    >>> b = FlatBuffer(3, dtype=np.int64, fill_value=0)
    >>> b.extend(np.array([1, 2]))
    >>> b.extendleft(np.array([-1]))
    >>> b.view
    array([-1,  0,  0,  0,  1,  2])
    """

    def __init__(self, length=0, dtype=None, fill_value=None):
        self.dtype = np.dtype(dtype)
        self._head = 0
        self._length = int(length)
        if fill_value is None:
            self._storage = np.empty(self._length, dtype=self.dtype)
        else:
            self._storage = np.full(self._length, fill_value, dtype=self.dtype)

    @classmethod
    def from_values(cls, values, dtype=None):
        values = np.asarray(values, dtype=dtype).reshape(-1)
        buf = cls(0, dtype=values.dtype)
        buf._storage = np.array(values, copy=True)
        buf._length = values.size
        return buf

    @property
    def view(self):
        """The live elements, as a view into the storage."""
        return self._storage[self._head : self._head + self._length]

    @property
    def capacity(self):
        """The number of elements the buffer can hold without reallocating at the tail."""
        return self._storage.size - self._head

    def __len__(self):
        return self._length

    def _grown(self, required, current):
        if required == 0:
            return 0
        return max(required, int(current * _settings.GROWTH_FACTOR), _settings.MIN_CAPACITY)

    def _reallocate(self, head_room, tail_capacity):
        storage = np.empty(head_room + tail_capacity, dtype=self.dtype)
        storage[head_room : head_room + self._length] = self.view
        self._storage = storage
        self._head = head_room

    def resize(self, length):
        """
        Change the number of live elements. Shrinking discards elements at
        the tail, growing adds elements with unspecified values.
        """
        length = int(length)
        if length < 0:
            raise ValueError(f"Buffer length must be non-negative, got {length}.")

        if length > self.capacity:
            self._reallocate(self._head, self._grown(length, self.capacity))

        self._length = length

    def reserve(self, length):
        """Make room for ``length`` live elements without changing the length."""
        length = int(length)
        if length > self.capacity:
            self._reallocate(self._head, length)

    def extend(self, values):
        n = values.size
        if n == 0:
            return

        end = self._length + n
        if end > self.capacity:
            self._reallocate(self._head, self._grown(end, self.capacity))

        self._storage[self._head + self._length : self._head + end] = values
        self._length = end

    def extendleft(self, values):
        n = values.size
        if n == 0:
            return

        if n > self._head:
            tail_room = self.capacity - self._length
            head_room = self._grown(n, self._head + self._length)
            self._reallocate(head_room, self._length + tail_room)

        self._storage[self._head - n : self._head] = values
        self._head -= n
        self._length += n

    def shrink_to_fit(self):
        if self._storage.size != self._length:
            self._storage = self.view.copy()
            self._head = 0

    def copy(self):
        return FlatBuffer.from_values(self.view)

    def astype(self, dtype):
        return FlatBuffer.from_values(self.view, dtype=dtype)
