"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from mfp_bridge.adapters.mfp_http_client import MfpHttpClient
from mfp_bridge.config import Settings
from mfp_bridge.containers import AppContainer, build_container
from mfp_bridge.errors import TransportError

DIARY_HTML = """
<html><body>
<div id="diary">
<table id="diary-table">
  <tr class="meal_header">
    <td class="first alt">Breakfast</td>
    <td class="alt">Calories</td><td class="alt">Carbs</td><td class="alt">Fat</td>
    <td class="alt">Protein</td><td class="alt">Sodium</td><td class="alt">Sugar</td>
  </tr>
  <tr>
    <td class="first alt">
      <a class="js-show-edit-food" href="/food/edit_entry/1">
        Nature's Own - Wheat Bread, 2 slices
      </a>
    </td>
    <td>100</td>
    <td><span class="macro-value">10</span><span class="macro-percentage">40</span></td>
    <td>5</td><td>5</td><td>120</td><td>2</td>
    <td class="delete"><a href="#">x</a></td>
  </tr>
  <tr>
    <td class="first alt"><a href="/food/edit_entry/2">Banana, 1 medium</a></td>
    <td>50</td><td>5</td><td>2</td><td>3</td><td>1</td><td>14</td>
  </tr>
  <tr class="bottom">
    <td class="first alt"><a href="/food/add_to_diary?meal=0">Add Food</a></td>
    <td>150</td><td>15</td><td>7</td><td>8</td><td>121</td><td>16</td>
  </tr>
  <tr class="spacer"><td></td></tr>
  <tr class="meal_header"><td class="first alt">Lunch</td></tr>
  <tr class="bottom">
    <td class="first alt"><a href="/food/add_to_diary?meal=1">Add Food</a></td>
  </tr>
  <tr class="meal_header"><td class="first alt">Dinner</td></tr>
  <tr>
    <td class="first alt"><a href="/food/edit_entry/3">Water</a></td>
    <td>0</td><td>0</td><td>0</td><td>0</td><td>0</td><td>0</td>
  </tr>
  <tr class="total">
    <td class="first">Totals</td>
    <td>150</td><td>15</td><td>7</td><td>8</td><td>121</td><td>16</td>
  </tr>
  <tr class="total alt">
    <td class="first">Your Daily Goal</td>
    <td>2,000</td><td>250</td><td>67</td><td>100</td><td>2,300</td><td>38</td>
  </tr>
  <tr class="total remaining">
    <td class="first">Remaining</td>
    <td>1,850</td><td>235</td><td>60</td><td>92</td><td>2,179</td><td>22</td>
  </tr>
</table>
<div class="water-counter"><span class="cups">3</span><span class="goal">8</span></div>
</div>
</body></html>
"""


def diary_page(calories: float, goal: float = 2000) -> str:
    """Build a one-entry diary page with matching totals and goal rows."""
    return f"""
<html><body><table>
  <tr class="meal_header"><td class="first alt">Breakfast</td></tr>
  <tr>
    <td class="first alt"><a href="/food/edit_entry/9">Oats, 1 cup</a></td>
    <td>{calories}</td><td>10</td><td>20</td><td>30</td>
  </tr>
  <tr class="total">
    <td class="first">Totals</td>
    <td>{calories}</td><td>10</td><td>20</td><td>30</td><td>100</td><td>5</td>
  </tr>
  <tr class="total alt">
    <td class="first">Your Daily Goal</td>
    <td>{goal}</td><td>250</td><td>67</td><td>100</td>
  </tr>
</table></body></html>
"""


EMPTY_DIARY_HTML = """
<html><body><table>
  <tr class="meal_header"><td class="first alt">Breakfast</td></tr>
  <tr class="bottom">
    <td class="first alt"><a href="/food/add_to_diary?meal=0">Add Food</a></td>
  </tr>
  <tr class="total">
    <td class="first">Totals</td><td>0</td><td>0</td><td>0</td><td>0</td>
  </tr>
</table></body></html>
"""


@dataclass
class FakeMfpClient(MfpHttpClient):
    """Serves canned pages by path and records every request."""

    pages: dict[str, str | Exception] = field(default_factory=dict)
    requests: list[str] = field(default_factory=list)
    posts: list[tuple[str, dict[str, str]]] = field(default_factory=list)
    post_error: Exception | None = None
    session_valid: bool = True
    closed: bool = False

    async def get(self, path: str) -> str:
        self.requests.append(path)
        page = self.pages.get(path)
        if page is None:
            page = self.pages.get(path.split("?", 1)[0])
        if page is None:
            raise TransportError(f"HTTP error: 404 {path}", status_code=404)
        if isinstance(page, Exception):
            raise page
        return page

    async def post(self, path: str, data: dict[str, str]) -> str:
        self.requests.append(path)
        self.posts.append((path, data))
        if self.post_error is not None:
            raise self.post_error
        return "<html></html>"

    async def validate_session(self) -> bool:
        return self.session_valid

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> Settings:
    return Settings(
        mfp_cookie="session=abc",
        mfp_validate_on_startup=False,
        mfp_summary_delay_seconds=0,
    )


@pytest.fixture
def mfp_client() -> FakeMfpClient:
    return FakeMfpClient(pages={"/food/diary": DIARY_HTML})


@pytest.fixture
def container(settings: Settings, mfp_client: FakeMfpClient) -> AppContainer:
    return build_container(settings, mfp_client=mfp_client)
