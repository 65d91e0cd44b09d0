"""
Route analyzer.

Maps file-system routing conventions to URL routes for both routers:

- pages router: every code file under the first `pages` directory, except
  `_`-prefixed files; `index` maps to its directory, `api/` is API.
- app router: every directory under the first `app` directory holding a
  `page.*` or `route.*` file; route groups `(x)` and slots `@x` do not
  appear in the URL.

Dynamic segments: `[x]` -> `:x`, `[...x]` -> `*`, `[[...x]]` -> `*?`.
"""

from __future__ import annotations

from enum import IntEnum
from typing import List, Optional, Tuple

from nextlens.analysis.application.scanner import iter_directories, iter_files
from nextlens.analysis.domain.routes import RouteInfo, RouteMap, RouterType, RouteStats
from nextlens.analysis.domain.structure import DirectoryEntry, FileEntry
from nextlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

ROUTE_EXTENSIONS = frozenset({".ts", ".tsx", ".js", ".jsx"})


class SegmentClass(IntEnum):
    """Matching precedence of a URL segment; lower matches first."""

    STATIC = 0
    DYNAMIC = 1
    CATCH_ALL = 2
    OPTIONAL_CATCH_ALL = 3


def convert_segment(segment: str) -> Tuple[str, Optional[str], SegmentClass]:
    """
    Convert one file-system segment to its URL form.

    Returns:
        (url segment, parameter name or None, segment class)
    """
    if segment.startswith("[[...") and segment.endswith("]]"):
        return "*?", segment[5:-2], SegmentClass.OPTIONAL_CATCH_ALL
    if segment.startswith("[...") and segment.endswith("]"):
        return "*", segment[4:-1], SegmentClass.CATCH_ALL
    if segment.startswith("[") and segment.endswith("]"):
        name = segment[1:-1]
        return f":{name}", name, SegmentClass.DYNAMIC
    return segment, None, SegmentClass.STATIC


def is_hidden_app_segment(segment: str) -> bool:
    """Route groups `(marketing)` and parallel-route slots `@modal`."""
    return (segment.startswith("(") and segment.endswith(")")) or segment.startswith("@")


def build_url(segments: List[str]) -> Tuple[str, List[str], SegmentClass]:
    """URL path, parameters and the route's precedence class."""
    parts: List[str] = []
    params: List[str] = []
    precedence = SegmentClass.STATIC

    for segment in segments:
        if not segment:
            continue
        part, param, segment_class = convert_segment(segment)
        parts.append(part)
        if param is not None:
            params.append(param)
        precedence = max(precedence, segment_class)

    return "/" + "/".join(parts), params, precedence


def _relative_to(relative_path: str, directory: DirectoryEntry) -> str:
    if not directory.relative_path:
        return relative_path
    return relative_path[len(directory.relative_path) + 1 :]


def _find_router_directory(tree: DirectoryEntry, router_type: RouterType) -> Optional[DirectoryEntry]:
    """First directory below the root, in tree order, carrying the router's role flag."""
    for directory in iter_directories(tree):
        if not directory.relative_path:
            continue
        flags = directory.role_flags
        if (router_type == RouterType.PAGES and flags.is_pages) or (
            router_type == RouterType.APP and flags.is_app
        ):
            return directory
    return None


def _sort_routes(ranked: List[Tuple[SegmentClass, RouteInfo]]) -> List[RouteInfo]:
    ranked.sort(key=lambda item: (item[0], item[1].path))
    return [route for _, route in ranked]


def pages_router_routes(pages_dir: DirectoryEntry) -> List[RouteInfo]:
    ranked: List[Tuple[SegmentClass, RouteInfo]] = []

    for file in iter_files(pages_dir):
        if file.extension not in ROUTE_EXTENSIONS or file.stem.startswith("_"):
            continue

        relative = _relative_to(file.relative_path, pages_dir)
        segments = relative.split("/")[:-1]
        if file.stem != "index":
            segments.append(file.stem)

        url, params, precedence = build_url(segments)
        is_api = bool(segments) and segments[0] == "api"
        ranked.append(
            (
                precedence,
                RouteInfo(
                    id=f"pages:{relative}",
                    path=url,
                    file_path=file.path,
                    is_dynamic=bool(params),
                    is_api=is_api,
                    is_page=not is_api,
                    router_type=RouterType.PAGES,
                    params=params,
                ),
            )
        )

    return _sort_routes(ranked)


def _route_file(directory: DirectoryEntry, stem: str) -> Optional[FileEntry]:
    for file in directory.files:
        if file.stem == stem and file.extension in ROUTE_EXTENSIONS:
            return file
    return None


def app_router_routes(app_dir: DirectoryEntry) -> List[RouteInfo]:
    ranked: List[Tuple[SegmentClass, RouteInfo]] = []

    for directory in iter_directories(app_dir):
        page = _route_file(directory, "page")
        handler = _route_file(directory, "route")
        if page is None and handler is None:
            continue

        relative = _relative_to(directory.relative_path, app_dir) if directory is not app_dir else ""
        segments = [
            segment for segment in relative.split("/") if segment and not is_hidden_app_segment(segment)
        ]
        url, params, precedence = build_url(segments)
        is_api = handler is not None
        ranked.append(
            (
                precedence,
                RouteInfo(
                    id=f"app:{relative}",
                    path=url,
                    file_path=(handler or page).path,
                    is_dynamic=bool(params),
                    is_api=is_api,
                    is_page=not is_api,
                    router_type=RouterType.APP,
                    params=params,
                    has_layout=_route_file(directory, "layout") is not None,
                ),
            )
        )

    return _sort_routes(ranked)


def route_stats(pages_routes: List[RouteInfo], app_routes: List[RouteInfo]) -> RouteStats:
    routes = pages_routes + app_routes
    return RouteStats(
        total_routes=len(routes),
        page_routes=sum(1 for route in routes if not route.is_api),
        api_routes=sum(1 for route in routes if route.is_api),
        dynamic_routes=sum(1 for route in routes if route.is_dynamic),
        pages_router=len(pages_routes),
        app_router=len(app_routes),
    )


def analyze_routes(tree: DirectoryEntry) -> RouteMap:
    """Build the route map: pages-router routes first, then app-router routes."""
    pages_dir = _find_router_directory(tree, RouterType.PAGES)
    app_dir = _find_router_directory(tree, RouterType.APP)

    pages_routes = pages_router_routes(pages_dir) if pages_dir is not None else []
    app_routes = app_router_routes(app_dir) if app_dir is not None else []

    stats = route_stats(pages_routes, app_routes)
    logger.info(
        "route_analysis_completed",
        total=stats.total_routes,
        pages_router=stats.pages_router,
        app_router=stats.app_router,
    )
    return RouteMap(routes=pages_routes + app_routes, stats=stats)


def find_page_files(tree: DirectoryEntry) -> List[FileEntry]:
    """Code files that are pages: flagged, under `pages/`, or `app/**/page.*`."""
    return [
        file
        for file in iter_files(tree)
        if file.extension in ROUTE_EXTENSIONS
        and (
            file.role_flags.is_page
            or "pages" in file.segments
            or ("app" in file.segments and file.stem == "page")
        )
    ]
