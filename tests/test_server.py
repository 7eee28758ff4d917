import unittest

from aiohttp import test_utils, web

from data_source.errors import (
    IoError,
    NetworkError,
    NoCacheFileError,
    NotFoundError,
    NotFoundInDirectoriesError,
    SizeLimitExceededError,
    TimeError,
    status_code_for,
)
from data_source.models import InlineSource
from data_source.resolver import SourceResolver
from data_source.server import create_app, guess_mime_type, register_data_source_route


class TooLargeBackend:
    def get_file_content(self, name: str):
        raise SizeLimitExceededError(content_length=10, size_limit=1)


class StatusMappingTests(unittest.TestCase):
    def test_not_found_kinds_map_to_404(self) -> None:
        self.assertEqual(status_code_for(NotFoundError()), 404)
        self.assertEqual(status_code_for(NotFoundInDirectoriesError("a", ["d"])), 404)

    def test_size_limit_maps_to_413(self) -> None:
        self.assertEqual(status_code_for(SizeLimitExceededError(content_length=2, size_limit=1)), 413)

    def test_everything_else_maps_to_500(self) -> None:
        for error in (NetworkError("x"), IoError("x"), TimeError("x"), NoCacheFileError()):
            self.assertEqual(status_code_for(error), 500)

    def test_mime_guess_defaults_to_octet_stream(self) -> None:
        self.assertEqual(guess_mime_type("data.json"), "application/json")
        self.assertEqual(guess_mime_type("notes.txt"), "text/plain")
        self.assertEqual(guess_mime_type("blob.unknownext"), "application/octet-stream")
        self.assertEqual(guess_mime_type("no-extension"), "application/octet-stream")


class DataSourceHandlerTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        resolver = SourceResolver.name_map(
            {
                "motd.txt": InlineSource(b"hello"),
                "conf/app.json": InlineSource(b"{}"),
            }
        )
        self.client = test_utils.TestClient(test_utils.TestServer(create_app(resolver)))
        await self.client.start_server()

    async def asyncTearDown(self) -> None:
        await self.client.close()

    async def test_get_returns_content_with_guessed_type(self) -> None:
        response = await self.client.get("/files/motd.txt")

        self.assertEqual(response.status, 200)
        self.assertEqual(response.content_type, "text/plain")
        self.assertEqual(await response.read(), b"hello")

    async def test_nested_name(self) -> None:
        response = await self.client.get("/files/conf/app.json")

        self.assertEqual(response.status, 200)
        self.assertEqual(response.content_type, "application/json")
        self.assertEqual(await response.read(), b"{}")

    async def test_head_is_allowed(self) -> None:
        response = await self.client.head("/files/motd.txt")

        self.assertEqual(response.status, 200)

    async def test_missing_name_is_404_with_diagnostic_body(self) -> None:
        response = await self.client.get("/files/missing.txt")

        self.assertEqual(response.status, 404)
        body = await response.text()
        self.assertTrue(body.startswith("404 Not Found\n\nmissing.txt\n\n"))

    async def test_other_methods_are_rejected(self) -> None:
        response = await self.client.post("/files/motd.txt", data=b"x")

        self.assertEqual(response.status, 405)
        self.assertEqual(await response.text(), "Method not allowed")


class RegisterRouteTests(unittest.IsolatedAsyncioTestCase):
    async def test_size_limit_maps_to_payload_too_large(self) -> None:
        app = register_data_source_route(web.Application(), "/assets/", SourceResolver.pluggable(TooLargeBackend()))
        client = test_utils.TestClient(test_utils.TestServer(app))
        await client.start_server()
        try:
            response = await client.get("/assets/big.bin")
            self.assertEqual(response.status, 413)
        finally:
            await client.close()


if __name__ == "__main__":
    unittest.main()
