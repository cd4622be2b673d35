"""Request helpers shared by the API tests."""

from typing import Dict, List, Optional, Tuple

from httpx import AsyncClient, Response


async def upload(
    client: AsyncClient,
    subject_id: Optional[str],
    files: List[Tuple[str, bytes]],
    subject_name: Optional[str] = None,
    owner_id: Optional[str] = None,
) -> Response:
    data: Dict[str, str] = {}
    if subject_id is not None:
        data["subjectId"] = subject_id
    if subject_name is not None:
        data["subjectName"] = subject_name
    headers = {"X-User-Id": owner_id} if owner_id else {}
    multipart = [("files", (name, content, "application/octet-stream")) for name, content in files]
    return await client.post("/api/upload", data=data, files=multipart or None, headers=headers)
