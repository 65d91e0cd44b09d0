"""Tests for file-system route mapping (pages router and app router)."""

import pytest

from nextlens.analysis.application.route_analyzer import (
    SegmentClass,
    analyze_routes,
    build_url,
    convert_segment,
    find_page_files,
)
from nextlens.analysis.application.scanner import scan_project
from nextlens.analysis.domain.routes import RouterType


class TestSegments:
    """Segment conversion and precedence."""

    @pytest.mark.parametrize(
        "segment, expected",
        [
            ("blog", ("blog", None, SegmentClass.STATIC)),
            ("[id]", (":id", "id", SegmentClass.DYNAMIC)),
            ("[...slug]", ("*", "slug", SegmentClass.CATCH_ALL)),
            ("[[...parts]]", ("*?", "parts", SegmentClass.OPTIONAL_CATCH_ALL)),
        ],
    )
    def test_convert_segment(self, segment, expected):
        assert convert_segment(segment) == expected

    def test_build_url(self):
        assert build_url([]) == ("/", [], SegmentClass.STATIC)
        assert build_url(["shop", "[category]", "[...rest]"]) == (
            "/shop/:category/*",
            ["category", "rest"],
            SegmentClass.CATCH_ALL,
        )


class TestPagesRouter:
    """`pages/` conventions."""

    def test_index_and_dynamic_page(self, project_factory):
        root = project_factory(
            {
                "pages/index.tsx": "export default function Home() { return null; }\n",
                "pages/[id].tsx": "export default function Item() { return null; }\n",
            }
        )

        route_map = analyze_routes(scan_project(root))

        assert len(route_map.routes) == 2
        home, item = route_map.routes
        assert (home.path, home.is_dynamic, home.params) == ("/", False, [])
        assert (item.path, item.is_dynamic, item.params) == ("/:id", True, ["id"])
        assert item.router_type == RouterType.PAGES
        assert item.id == "pages:[id].tsx"
        assert item.file_path.endswith("pages/[id].tsx")

    def test_ids_are_unique_per_file(self, project_factory):
        root = project_factory({"pages/blog.tsx": "", "pages/blog/index.tsx": ""})

        routes = analyze_routes(scan_project(root)).routes

        assert [route.path for route in routes] == ["/blog", "/blog"]
        assert sorted(route.id for route in routes) == ["pages:blog.tsx", "pages:blog/index.tsx"]

    def test_special_files_api_and_ordering(self, project_factory):
        root = project_factory(
            {
                "pages/_app.tsx": "",
                "pages/_document.tsx": "",
                "pages/index.tsx": "",
                "pages/about.tsx": "",
                "pages/api/users.ts": "",
                "pages/blog/[...slug].tsx": "",
                "pages/docs/[[...parts]].tsx": "",
                "pages/blog/[id].tsx": "",
                "pages/notes.md": "",
            }
        )

        route_map = analyze_routes(scan_project(root))

        assert [route.path for route in route_map.routes] == [
            "/",
            "/about",
            "/api/users",
            "/blog/:id",
            "/blog/*",
            "/docs/*?",
        ]
        api = route_map.routes[2]
        assert api.is_api and not api.is_page
        assert route_map.stats.total_routes == 6
        assert route_map.stats.api_routes == 1
        assert route_map.stats.dynamic_routes == 3
        assert route_map.stats.pages_router == 6


class TestAppRouter:
    """`app/` conventions."""

    def test_app_routes(self, project_factory):
        root = project_factory(
            {
                "app/page.tsx": "",
                "app/layout.tsx": "",
                "app/(marketing)/about/page.tsx": "",
                "app/blog/[slug]/page.tsx": "",
                "app/@modal/login/page.tsx": "",
                "app/api/health/route.ts": "",
                "app/components/Nav.tsx": "",
            }
        )

        route_map = analyze_routes(scan_project(root))
        by_path = {route.path: route for route in route_map.routes}

        assert [route.path for route in route_map.routes] == [
            "/",
            "/about",
            "/api/health",
            "/login",
            "/blog/:slug",
        ]
        assert by_path["/"].has_layout
        assert by_path["/"].id == "app:"
        assert by_path["/about"].id == "app:(marketing)/about"
        assert by_path["/api/health"].is_api
        assert by_path["/api/health"].file_path.endswith("route.ts")
        assert by_path["/blog/:slug"].params == ["slug"]
        assert all(route.router_type == RouterType.APP for route in route_map.routes)

    def test_both_routers_pages_first(self, project_factory):
        root = project_factory({"pages/legacy.tsx": "", "app/page.tsx": ""})

        route_map = analyze_routes(scan_project(root))

        assert [(r.router_type, r.path) for r in route_map.routes] == [
            (RouterType.PAGES, "/legacy"),
            (RouterType.APP, "/"),
        ]
        assert route_map.stats.app_router == 1

    def test_src_layout(self, project_factory):
        root = project_factory({"src/app/dashboard/page.tsx": ""})

        assert [r.path for r in analyze_routes(scan_project(root)).routes] == ["/dashboard"]

    def test_root_named_app_is_not_a_router(self, project_factory):
        root = project_factory({"components/Button.tsx": ""}, name="app")

        assert analyze_routes(scan_project(root)).routes == []


def test_no_routes(project_factory):
    route_map = analyze_routes(scan_project(project_factory({"lib/a.ts": ""})))

    assert route_map.routes == []
    assert route_map.stats.total_routes == 0


def test_find_page_files(project_factory):
    root = project_factory(
        {
            "pages/index.tsx": "",
            "app/shop/page.tsx": "",
            "components/Card.tsx": "",
            "pages/notes.md": "",
        }
    )

    names = sorted(file.relative_path for file in find_page_files(scan_project(root)))

    assert names == ["app/shop/page.tsx", "pages/index.tsx"]
