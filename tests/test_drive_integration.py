import io
import os
import unittest
import uuid

from fastapi.testclient import TestClient

from drivegate.api import create_app
from drivegate.settings import Settings

CREDENTIALS = os.environ.get("DRIVEGATE_IT_CREDENTIALS", "").strip()
FOLDER_ID = os.environ.get("DRIVEGATE_IT_FOLDER_ID", "").strip()


@unittest.skipUnless(
    CREDENTIALS and FOLDER_ID,
    "set DRIVEGATE_IT_CREDENTIALS and DRIVEGATE_IT_FOLDER_ID to run against real Drive",
)
class TestGoogleDriveIntegration(unittest.TestCase):
    """
    Integration test with real Google Drive.

    Required env vars:
        - DRIVEGATE_IT_CREDENTIALS: path to a service-account JSON key
        - DRIVEGATE_IT_FOLDER_ID: Drive folder shared with that account (safe sandbox)
    """

    def test_upload_list_download_metadata_delete(self) -> None:
        settings = Settings(credentials_path=CREDENTIALS, replace_scope="folder")
        client = TestClient(create_app(settings))
        name = f"drivegate_it_{uuid.uuid4().hex}.txt"

        # 1) upload, then upload again to exercise replace
        for payload in (b"first", b"second"):
            resp = client.post(
                "/upload/file",
                data={"folder": FOLDER_ID},
                files={"file": (name, io.BytesIO(payload), "text/plain")},
            )
            self.assertEqual(resp.status_code, 200, resp.text)
        file_id = resp.json()["data"]["file_id"]

        try:
            # 2) list shows exactly one file with that name
            resp = client.get("/list", params={"folder": FOLDER_ID})
            self.assertEqual(resp.status_code, 200, resp.text)
            names = [f["name"] for f in resp.json()["data"]["files"]]
            self.assertEqual(names.count(name), 1)

            # 3) download returns the replaced content
            resp = client.get(f"/download/{file_id}")
            self.assertEqual(resp.status_code, 200)
            self.assertEqual(resp.content, b"second")

            # 4) metadata by name
            resp = client.post("/file/metadata", json={"file_name": name})
            self.assertEqual(resp.status_code, 200, resp.text)
            self.assertEqual(resp.json()["data"]["file_id"], file_id)
        finally:
            resp = client.delete(f"/file/delete/{file_id}")
            self.assertEqual(resp.status_code, 200, resp.text)


if __name__ == "__main__":
    unittest.main()
