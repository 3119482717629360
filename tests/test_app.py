"""Tests for application startup and shutdown"""

import pytest

from tresor.main import create_app, lifespan


class TestLifespan:
    @pytest.mark.asyncio
    async def test_resources_released_on_clean_shutdown(self, settings):
        app = create_app(settings)

        async with lifespan(app):
            assert app.state.credentials.dummy_hash.startswith("$2b$")

        assert app.state.credentials.executor._executor is None
        assert app.state.db._engine is None

    @pytest.mark.asyncio
    async def test_resources_released_when_serving_fails(self, settings):
        app = create_app(settings)

        with pytest.raises(RuntimeError):
            async with lifespan(app):
                raise RuntimeError("server crashed")

        assert app.state.credentials.executor._executor is None
        assert app.state.db._engine is None
