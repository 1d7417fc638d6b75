import io
import tempfile
import unittest
from pathlib import Path

from drivegate.errors import (
    AuthError,
    ConnectError,
    NotFoundError,
    UploadStepError,
)
from drivegate.manager import GatewayManager
from drivegate.models import ByFileId, ByFileName, RemoteFile, UploadRequest, UploadStep
from drivegate.settings import Settings


class FakeController:
    def __init__(self, existing=None) -> None:
        self.calls = []
        self.existing = list(existing or [])
        self.fail = {}

    def _maybe_fail(self, op: str) -> None:
        if op in self.fail:
            raise self.fail[op]

    def find(self, query: str) -> list[RemoteFile]:
        self.calls.append(("find", query))
        self._maybe_fail("find")
        return list(self.existing)

    def list_children(self, folder_id: str) -> list[RemoteFile]:
        self.calls.append(("list_children", folder_id))
        self._maybe_fail("list_children")
        return list(self.existing)

    def delete(self, file_id: str) -> None:
        self.calls.append(("delete", file_id))
        self._maybe_fail("delete")

    def create_file(self, name, mime_type, content, parent_id) -> RemoteFile:
        self.calls.append(("create_file", name, mime_type, content.read(), parent_id))
        self._maybe_fail("create_file")
        return RemoteFile(file_id="NEW1", name=name, parents=[parent_id])

    def get(self, file_id: str) -> RemoteFile:
        self.calls.append(("get", file_id))
        self._maybe_fail("get")
        return RemoteFile(
            file_id=file_id,
            name="a.txt",
            web_view_link=f"https://drive.google.com/file/d/{file_id}/view",
        )

    def download(self, file_id: str):
        self.calls.append(("download", file_id))
        return "stream"

    def ops(self) -> list[str]:
        return [c[0] for c in self.calls]


def _upload(name: str = "a.txt", folder: str = "P1", data: bytes = b"hello") -> UploadRequest:
    content = io.BytesIO(data)
    content.read()  # leave the cursor at the end, as a form parser might
    return UploadRequest(folder_id=folder, file_name=name, mime_type="text/plain", content=content)


class TestUploadReplace(unittest.TestCase):
    def test_new_name_uploads_without_delete(self) -> None:
        controller = FakeController()
        mgr = GatewayManager.from_controller(controller)

        result = mgr.upload_replace(_upload())

        self.assertEqual(result.file_id, "NEW1")
        self.assertEqual(result.name, "a.txt")
        self.assertTrue(result.web_view_link)
        self.assertEqual(controller.ops(), ["find", "create_file", "get"])
        self.assertEqual(controller.calls[0], ("find", "name = 'a.txt'"))
        self.assertEqual(
            controller.calls[1],
            ("create_file", "a.txt", "text/plain", b"hello", "P1"),
        )
        self.assertEqual(controller.calls[2], ("get", "NEW1"))

    def test_existing_name_deletes_first_match_only(self) -> None:
        controller = FakeController(
            existing=[
                RemoteFile(file_id="OLD1", name="a.txt"),
                RemoteFile(file_id="OLD2", name="a.txt"),
            ]
        )
        mgr = GatewayManager.from_controller(controller)

        mgr.upload_replace(_upload())

        self.assertEqual(controller.ops(), ["find", "delete", "create_file", "get"])
        self.assertEqual(controller.calls[1], ("delete", "OLD1"))

    def test_replace_all_duplicates(self) -> None:
        controller = FakeController(
            existing=[
                RemoteFile(file_id="OLD1", name="a.txt"),
                RemoteFile(file_id="OLD2", name="a.txt"),
            ]
        )
        mgr = GatewayManager.from_controller(controller, replace_all_duplicates=True)

        mgr.upload_replace(_upload())

        deletes = [c for c in controller.calls if c[0] == "delete"]
        self.assertEqual(deletes, [("delete", "OLD1"), ("delete", "OLD2")])

    def test_folder_scoped_search(self) -> None:
        controller = FakeController()
        mgr = GatewayManager.from_controller(controller, replace_scope="folder")

        mgr.upload_replace(_upload(name="it's.txt", folder="P9"))

        self.assertEqual(
            controller.calls[0],
            ("find", "(name = 'it\\'s.txt') and ('P9' in parents)"),
        )

    def test_invalid_replace_scope(self) -> None:
        with self.assertRaises(ValueError):
            GatewayManager.from_controller(FakeController(), replace_scope="drive")

    def test_delete_failure_stops_before_create(self) -> None:
        controller = FakeController(existing=[RemoteFile(file_id="OLD1", name="a.txt")])
        controller.fail["delete"] = NotFoundError("gone")
        mgr = GatewayManager.from_controller(controller)

        with self.assertRaises(UploadStepError) as ctx:
            mgr.upload_replace(_upload())

        self.assertIs(ctx.exception.step, UploadStep.DELETE)
        self.assertNotIn("create_file", controller.ops())

    def test_create_failure_after_delete_is_not_recovered(self) -> None:
        controller = FakeController(existing=[RemoteFile(file_id="OLD1", name="a.txt")])
        controller.fail["create_file"] = AuthError("expired")
        mgr = GatewayManager.from_controller(controller)

        with self.assertRaises(UploadStepError) as ctx:
            mgr.upload_replace(_upload())

        self.assertIs(ctx.exception.step, UploadStep.CREATE)
        self.assertEqual(controller.ops(), ["find", "delete", "create_file"])

    def test_list_and_get_failures_name_their_step(self) -> None:
        controller = FakeController()
        controller.fail["find"] = NotFoundError("x")
        with self.assertRaises(UploadStepError) as ctx:
            GatewayManager.from_controller(controller).upload_replace(_upload())
        self.assertIs(ctx.exception.step, UploadStep.LIST)

        controller = FakeController()
        controller.fail["get"] = NotFoundError("x")
        with self.assertRaises(UploadStepError) as ctx:
            GatewayManager.from_controller(controller).upload_replace(_upload())
        self.assertIs(ctx.exception.step, UploadStep.GET)

    def test_authentication_failure(self) -> None:
        def factory():
            raise AuthError("Failed to load service account credentials")

        mgr = GatewayManager(factory)

        with self.assertRaises(UploadStepError) as ctx:
            mgr.upload_replace(_upload())

        self.assertIs(ctx.exception.step, UploadStep.AUTHENTICATE)
        self.assertIsInstance(ctx.exception.cause, ConnectError)

    def test_closed_stream_fails_open_step(self) -> None:
        controller = FakeController()
        request = _upload()
        request.content.close()

        with self.assertRaises(UploadStepError) as ctx:
            GatewayManager.from_controller(controller).upload_replace(request)

        self.assertIs(ctx.exception.step, UploadStep.OPEN)
        self.assertEqual(controller.calls, [])


class TestOtherOperations(unittest.TestCase):
    def test_connect_wraps_factory_errors(self) -> None:
        def factory():
            raise RuntimeError("boom")

        with self.assertRaises(ConnectError) as ctx:
            GatewayManager(factory).connect()

        self.assertIsInstance(ctx.exception.cause, RuntimeError)

    def test_list_folder(self) -> None:
        controller = FakeController(existing=[RemoteFile(file_id="A", name="a")])

        files = GatewayManager.from_controller(controller).list_folder("P1")

        self.assertEqual([f.file_id for f in files], ["A"])
        self.assertEqual(controller.calls, [("list_children", "P1")])

    def test_open_download(self) -> None:
        controller = FakeController()
        self.assertEqual(GatewayManager.from_controller(controller).open_download("F1"), "stream")

    def test_lookup_by_id(self) -> None:
        controller = FakeController()

        found = GatewayManager.from_controller(controller).lookup_metadata(ByFileId("X"))

        self.assertEqual(found.file_id, "X")
        self.assertEqual(controller.calls, [("get", "X")])

    def test_lookup_by_id_propagates_not_found(self) -> None:
        controller = FakeController()
        controller.fail["get"] = NotFoundError("missing")

        with self.assertRaises(NotFoundError):
            GatewayManager.from_controller(controller).lookup_metadata(ByFileId("X"))

    def test_lookup_by_name(self) -> None:
        controller = FakeController(
            existing=[RemoteFile(file_id="A", name="a.txt"), RemoteFile(file_id="B", name="a.txt")]
        )
        mgr = GatewayManager.from_controller(controller)

        found = mgr.lookup_metadata(ByFileName("a.txt"))

        self.assertEqual(found.file_id, "A")
        self.assertEqual(controller.calls, [("find", "name = 'a.txt'")])

    def test_lookup_by_name_without_match(self) -> None:
        mgr = GatewayManager.from_controller(FakeController())
        self.assertIsNone(mgr.lookup_metadata(ByFileName("missing.txt")))

    def test_delete_twice_surfaces_remote_error(self) -> None:
        controller = FakeController()
        mgr = GatewayManager.from_controller(controller)

        mgr.delete("F1")
        controller.fail["delete"] = NotFoundError("File not found: F1.")
        with self.assertRaises(NotFoundError):
            mgr.delete("F1")

        self.assertEqual(controller.calls, [("delete", "F1"), ("delete", "F1")])


class TestFromSettings(unittest.TestCase):
    def test_missing_secret_is_a_per_request_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            settings = Settings(credentials_path=str(Path(tmp) / "missing.json"))
            mgr = GatewayManager.from_settings(settings)

            for _ in range(2):
                with self.assertRaises(ConnectError) as ctx:
                    mgr.list_folder("P1")
                self.assertIsInstance(ctx.exception.cause, AuthError)


if __name__ == "__main__":
    unittest.main()
