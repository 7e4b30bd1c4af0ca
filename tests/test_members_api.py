"""회원 검색 API 테스트.

Member search API tests: v1 search, v2 simple paging, v3 count-skip paging,
plain member listing and page parameter validation.
"""

from httpx import AsyncClient

from tests.conftest import count_queries


class TestHealth:
    async def test_health(self, client: AsyncClient):
        res = await client.get("/health")
        assert res.status_code == 200
        assert res.json() == {"status": "ok"}


class TestSearchApi:
    """조건 검색 API 테스트."""

    async def test_search_by_age(self, client: AsyncClient, members):
        """age_goe=35 → member4 한 건."""
        res = await client.get("/api/v1/members", params={"age_goe": 35})
        assert res.status_code == 200
        data = res.json()
        assert len(data) == 1
        assert data[0]["username"] == "member4"
        assert data[0]["team_name"] == "teamB"

    async def test_search_without_condition_uses_default_order(self, client: AsyncClient, members):
        res = await client.get("/api/v1/members")
        assert res.status_code == 200
        assert [row["username"] for row in res.json()] == ["member4", "member3", "member2", "member1"]

    async def test_blank_team_name_is_ignored(self, client: AsyncClient, members):
        res = await client.get("/api/v1/members", params={"team_name": "  ", "age_loe": 20})
        assert res.status_code == 200
        assert sorted(row["username"] for row in res.json()) == ["member1", "member2"]

    async def test_teamless_member_listed(self, client: AsyncClient, teamless_member):
        res = await client.get("/api/v1/members", params={"age_goe": 50})
        assert res.status_code == 200
        assert res.json() == [{
            "member_id": teamless_member.id,
            "username": "loner",
            "age": 50,
            "team_id": None,
            "team_name": None,
        }]


class TestListApi:
    """회원 목록 API 테스트."""

    async def test_list_all(self, client: AsyncClient, members):
        res = await client.get("/api/v1/members/all")
        assert res.status_code == 200
        assert len(res.json()) == 4

    async def test_list_by_username(self, client: AsyncClient, members):
        res = await client.get("/api/v1/members/all", params={"username": "member1"})
        assert res.status_code == 200
        data = res.json()
        assert len(data) == 1
        assert data[0]["age"] == 10


class TestPageApi:
    """페이지 검색 API 테스트."""

    async def test_v3_first_page(self, client: AsyncClient, members, query_log):
        res = await client.get("/api/v3/members", params={"page": 0, "size": 2})
        assert res.status_code == 200
        data = res.json()
        assert [row["username"] for row in data["items"]] == ["member4", "member3"]
        assert data["total"] == 4
        assert data["pages"] == 2
        assert len(count_queries(query_log)) == 1

    async def test_v3_short_first_page_skips_count(self, client: AsyncClient, members, query_log):
        res = await client.get("/api/v3/members", params={"size": 10, "team_name": "teamA"})
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 2
        assert count_queries(query_log) == []

    async def test_v2_always_counts(self, client: AsyncClient, members, query_log):
        res = await client.get("/api/v2/members", params={"size": 10})
        assert res.status_code == 200
        assert res.json()["total"] == 4
        assert len(count_queries(query_log)) == 1

    async def test_page_beyond_total(self, client: AsyncClient, members):
        res = await client.get("/api/v3/members", params={"page": 5, "size": 2})
        assert res.status_code == 200
        data = res.json()
        assert data["items"] == []
        assert data["total"] == 4
        assert data["page"] == 5

    async def test_invalid_size_rejected(self, client: AsyncClient, members, query_log):
        res = await client.get("/api/v3/members", params={"size": 0})
        assert res.status_code == 422
        assert query_log == []

    async def test_size_above_max_rejected(self, client: AsyncClient, members, query_log):
        res = await client.get("/api/v3/members", params={"size": 1000})
        assert res.status_code == 400
        assert query_log == []

    async def test_huge_page_rejected_before_query(self, client: AsyncClient, members, query_log):
        """offset이 BIGINT 범위를 넘으면 400."""
        res = await client.get("/api/v3/members", params={"page": 10**19, "size": 10})
        assert res.status_code == 400
        assert query_log == []


class TestOpenApi:
    """OpenAPI 스키마 테스트."""

    async def test_page_response_schema(self, client: AsyncClient):
        res = await client.get("/openapi.json")
        assert res.status_code == 200
        schemas = res.json()["components"]["schemas"]
        page_schemas = [name for name in schemas if name.startswith("Page_MemberTeamDto_")]
        assert page_schemas
        assert {"items", "total", "page", "pages"} <= set(schemas[page_schemas[0]]["properties"])
