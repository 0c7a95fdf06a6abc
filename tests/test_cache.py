import logging
LOGGER = logging.getLogger(__name__)

from aisamples.core.cache import sample_cache, sample_cache_clear
import pytest


count: int = 0


class TestCache:

    @pytest.fixture
    def setup(self):
        yield
        global count
        count = 0
        sample_cache_clear()

    def test_count(self, setup):

        @sample_cache
        def increment():
            global count
            count += 1
            return count

        assert increment() == 1
        assert increment() == 1

    def test_count_class(self, setup):

        class MyClass:

            @classmethod
            @sample_cache
            def increment(cls):
                global count
                count += 1
                return count

        assert MyClass.increment() == 1
        assert MyClass.increment() == 1

    def test_clear(self, setup):

        @sample_cache
        def increment():
            global count
            count += 1
            return count

        assert increment() == 1
        sample_cache_clear()
        assert increment() == 2
