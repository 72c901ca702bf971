"""
Shared fixtures: an in-process fake of the Robotoff logo endpoints,
served through httpx.MockTransport.
"""
import json
from typing import Any, Dict, List, Optional

import httpx
import pytest

from logo_review.adapters.robotoff.client import RobotoffClient

ROBOTOFF_URL = "http://robotoff.test/api/v1"
IMAGE_BASE_URL = "http://images.test/images/products"


def logo_payload(logo_id: int, **extra: Any) -> Dict[str, Any]:
    return {
        "id": logo_id,
        "bounding_box": [0.1, 0.2, 0.3, 0.4],
        "image": {"source_image": f"/324/{logo_id}.jpg"},
        **extra,
    }


def neighbors(ids, start_distance: float = 1.0) -> List[Dict[str, Any]]:
    return [{"logo_id": i, "distance": start_distance + n} for n, i in enumerate(ids)]


class FakeRobotoff:
    """
    Minimal stand-in for the three Robotoff endpoints.
    - results: neighbor list returned by the search (truncated to `count`)
    - logos: id -> metadata payload; ids missing here are omitted from responses
    """

    def __init__(self) -> None:
        self.results: List[Dict[str, Any]] = []
        self.logos: Dict[int, Dict[str, Any]] = {}
        self.search_status = 200
        self.images_status = 200
        self.annotate_status = 200
        self.html_for: Optional[str] = None  # path part answered with an HTML page
        self.requests: List[httpx.Request] = []
        self.annotated: List[List[Dict[str, Any]]] = []

    def add_logos(self, ids, **extra: Any) -> None:
        for i in ids:
            self.logos[i] = logo_payload(i, **extra)

    def set_results(self, ids, start_distance: float = 1.0, with_logos: bool = True) -> None:
        self.results = neighbors(ids, start_distance)
        if with_logos:
            self.add_logos(ids)

    def calls(self, path_part: str) -> List[httpx.Request]:
        return [r for r in self.requests if path_part in r.url.path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if self.html_for and self.html_for in path:
            return httpx.Response(200, text="<html>maintenance</html>", headers={"content-type": "text/html"})
        if "/ann/search" in path:
            if self.search_status != 200:
                return httpx.Response(self.search_status, json={"error": "search down"})
            count = int(request.url.params.get("count", 50))
            return httpx.Response(200, json={"results": self.results[:count]})
        if path.endswith("/images/logos/annotate"):
            if self.annotate_status != 200:
                return httpx.Response(self.annotate_status, json={"error": "annotate down"})
            self.annotated.append(json.loads(request.content)["annotations"])
            return httpx.Response(200, json={"created": len(self.annotated[-1])})
        if path.endswith("/images/logos"):
            if self.images_status != 200:
                return httpx.Response(self.images_status, json={"error": "images down"})
            raw = request.url.params.get("logo_ids", "")
            ids = [int(i) for i in raw.split(",") if i]
            return httpx.Response(200, json={"logos": [self.logos[i] for i in ids if i in self.logos]})
        return httpx.Response(404)


@pytest.fixture
def fake_robotoff() -> FakeRobotoff:
    return FakeRobotoff()


@pytest.fixture
def robotoff_client(fake_robotoff: FakeRobotoff) -> RobotoffClient:
    return RobotoffClient(
        base_url=ROBOTOFF_URL,
        image_base_url=IMAGE_BASE_URL,
        transport=httpx.MockTransport(fake_robotoff.handler),
    )
