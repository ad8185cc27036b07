"""Tests for the per-framework adapters and their extractors."""

from route_scanner import DiscoveryMethod, FrameworkDetector, ProjectDescriptor, RouteKind
from route_scanner.adapters import (
    AdapterKind,
    ExpressAdapter,
    GenericAdapter,
    NextjsAdapter,
    ReactAdapter,
    RemixAdapter,
    adapter_for,
    extract_express_routes,
    extract_react_routes,
    extract_route_handler_methods,
)
from route_scanner.adapters.express import extract_mounted_routes
from route_scanner.adapters.react import extract_component_name
from route_scanner.adapters.remix import route_methods


def adapter_for_dir(root):
    project = ProjectDescriptor.load(root)
    return adapter_for(project, FrameworkDetector(project).detect())


def pairs(routes):
    return [(r.method, r.url) for r in routes]


# =============================================================================
# EXTRACTORS
# =============================================================================

class TestExpressExtraction:

    def test_handler_registrations(self):
        content = """
app.get('/', home);
router.post("/api/login", login);
server.delete(`/api/items/:id`, remove);
"""
        assert extract_express_routes(content) == [
            ("GET", "/"),
            ("POST", "/api/login"),
            ("DELETE", "/api/items/:id"),
        ]

    def test_use_mounts_need_to_look_like_endpoints(self):
        content = """
app.use('/static', express.static('public'));
app.use('/api', apiRouter);
app.use('/v1/reports', reports);
"""
        assert extract_express_routes(content) == [("GET", "/api"), ("GET", "/v1/reports")]

    def test_settings_getter_is_not_a_route(self):
        assert extract_express_routes("app.listen(app.get('port'));") == []

    def test_chained_route(self):
        content = "router.route('/books/:isbn').put(updateBook);"
        assert extract_express_routes(content) == [("PUT", "/books/:isbn")]

    def test_named_router_needs_absolute_path(self):
        content = """
usersRouter.patch('/users/:id', update);
cache.get('session-key', fallback);
"""
        assert extract_express_routes(content) == [("PATCH", "/users/:id")]

    def test_regex_anchors_and_param_patterns_are_stripped(self):
        assert extract_express_routes("app.get('^/files/:name$', send);") == [("GET", "/files/:name")]
        assert extract_express_routes("app.get('/users/:id(\\\\d+)', show);") == [("GET", "/users/:id")]

    def test_mounted_router_in_same_file(self):
        content = """
const admin = express.Router();
admin.get('/stats', stats);
admin.post('reports', createReport);
app.use('/admin', admin);
"""
        assert extract_mounted_routes(content) == [
            ("GET", "/admin/stats", "/admin", "/stats"),
            ("POST", "/admin/reports", "/admin", "/reports"),
        ]

    def test_interpolated_template_literal_is_not_a_route(self):
        content = "router.get(`${API_PREFIX}/users`, listUsers);\nrouter.get(`/api/items`, list);"
        assert extract_express_routes(content) == [("GET", "/api/items")]


class TestReactExtraction:

    def test_route_elements_and_objects(self):
        content = """
<Route path="/users/:id" element={<User />} />
const routes = [{ path: "/settings", element: <Settings /> }];
"""
        assert extract_react_routes(content) == ["/users/:id", "/settings"]

    def test_path_not_first_in_object(self):
        content = "createBrowserRouter([{ element: <Root />, path: 'dashboard' }])"
        assert extract_react_routes(content) == ["dashboard"]

    def test_filesystem_paths_ignored(self):
        content = """
export default { build: { outDir: "dist" }, resolve: { path: "./src" } };
const link = { path: "https://example.com" };
"""
        assert extract_react_routes(content) == []

    def test_component_names(self):
        content = """
<Route path="/legacy" component={Legacy} />
<Route path="/home" element={<Home />} />
{ path: "/pricing", element: <Pricing /> }
"""
        assert extract_component_name(content, "/legacy") == "Legacy"
        assert extract_component_name(content, "/home") == "Home"
        assert extract_component_name(content, "/pricing") == "Pricing"
        assert extract_component_name(content, "/missing") is None


class TestRouteHandlerMethods:

    def test_function_and_const_exports_in_source_order(self):
        content = """
export const POST = async (req) => new Response();
export async function GET(req) {}
export function DELETE() {}
"""
        assert extract_route_handler_methods(content) == ["POST", "GET", "DELETE"]

    def test_reexports(self):
        content = "const handler = auth();\nexport { handler as GET, handler as POST };"
        assert extract_route_handler_methods(content) == ["GET", "POST"]

    def test_no_handlers(self):
        assert extract_route_handler_methods("export const dynamic = 'force-dynamic';") == []


class TestRemixMethods:

    def test_loader_and_action(self):
        content = "export const loader = () => null;\nexport const action = () => null;"
        assert route_methods(content) == ["GET", "POST"]

    def test_action_only(self):
        assert route_methods("export async function action() {}") == ["POST"]

    def test_ui_only(self):
        assert route_methods("export default function Page() {}") == ["GET"]

    def test_unreadable(self):
        assert route_methods(None) == ["GET"]


# =============================================================================
# ADAPTERS ON SAMPLE PROJECTS
# =============================================================================

class TestNextjsAdapter:

    def test_selected_for_nextjs(self, samples_dir):
        adapter = adapter_for_dir(samples_dir / "nextjs_app")
        assert isinstance(adapter, NextjsAdapter)
        assert adapter.kind == AdapterKind.NEXTJS

    def test_capabilities(self, samples_dir):
        capabilities = adapter_for_dir(samples_dir / "nextjs_app").detect()
        assert capabilities["has_app_router"] is True
        assert capabilities["has_pages_router"] is True
        assert capabilities["version"] == "14.1.0"

    def test_discovers_app_and_pages_routes(self, samples_dir):
        routes = adapter_for_dir(samples_dir / "nextjs_app").discover_routes()
        assert pairs(routes) == [
            ("GET", "/"),
            ("GET", "/dashboard"),
            ("GET", "/settings"),
            ("GET", "/about"),
            ("GET", "/blog/*"),
            ("GET", "/login"),
            ("GET", "/api/health"),
            ("GET", "/api/users/:id"),
            ("DELETE", "/api/users/:id"),
            ("GET", "/api/webhook"),
            ("GET", "/docs"),
        ]
        assert all(r.discovery_method == DiscoveryMethod.FILE_CONVENTION for r in routes)

    def test_route_handlers_are_api(self, samples_dir):
        routes = adapter_for_dir(samples_dir / "nextjs_app").discover_routes()
        handler = next(r for r in routes if r.url == "/api/users/:id")
        assert handler.kind == RouteKind.API
        assert handler.source_file == "app/api/users/[id]/route.ts"
        assert handler.framework == "nextjs"

    def test_private_folders_and_reserved_pages_skipped(self, samples_dir):
        urls = {r.url for r in adapter_for_dir(samples_dir / "nextjs_app").discover_routes()}
        assert "/_components" not in urls
        assert "/_app" not in urls

    def test_src_app_directory(self, make_project):
        root = make_project({"src/app/reports/[year]/page.tsx": "export default function P() {}"},
                            manifest={"dependencies": {"next": "14"}})
        assert pairs(adapter_for_dir(root).discover_routes()) == [("GET", "/reports/:year")]

    def test_handler_without_exports_defaults_to_get(self, make_project):
        root = make_project({"app/api/ping/route.ts": "// todo"}, manifest={"dependencies": {"next": "14"}})
        assert pairs(adapter_for_dir(root).discover_routes()) == [("GET", "/api/ping")]


class TestExpressAdapter:

    def test_discovers_routes_across_files(self, samples_dir):
        adapter = adapter_for_dir(samples_dir / "express_app")
        assert isinstance(adapter, ExpressAdapter)
        assert pairs(adapter.discover_routes()) == [
            ("GET", "/"),
            ("GET", "/login"),
            ("POST", "/api/auth/login"),
            ("GET", "/api/health"),
            ("GET", "/dashboard"),
            ("GET", "/admin/stats"),
            ("GET", "/api/users"),
            ("GET", "/api/users/:id"),
            ("DELETE", "/api/users/:id"),
            ("PUT", "/api/users/:id"),
        ]

    def test_mounted_router_routes_only_exist_under_prefix(self, make_project):
        root = make_project({"server.js": """
const admin = express.Router();
admin.get('/stats', stats);
app.get('/health/live', live);
app.use('/admin', admin);
"""}, manifest={"dependencies": {"express": "4"}})
        assert pairs(adapter_for_dir(root).discover_routes()) == [
            ("GET", "/health/live"),
            ("GET", "/admin/stats"),
        ]

    def test_mounted_route_metadata(self, samples_dir):
        routes = adapter_for_dir(samples_dir / "express_app").discover_routes()
        mounted = next(r for r in routes if r.url == "/admin/stats")
        assert mounted.discovery_method == DiscoveryMethod.MOUNT
        assert mounted.kind == RouteKind.MOUNT
        assert mounted.source_file == "src/server.js"

    def test_skips_node_modules_tests_and_binary_files(self, samples_dir):
        adapter = adapter_for_dir(samples_dir / "express_app")
        routes = adapter.discover_routes()
        assert all("node_modules" not in r.source_file for r in routes)
        assert all(not r.source_file.endswith(".test.js") for r in routes)
        assert adapter.stats["files_errored"] == 1
        assert adapter.stats["files_scanned"] == 2
        assert adapter.stats["files_skipped"] == 1


class TestReactAdapter:

    def test_discovers_declared_routes(self, samples_dir):
        adapter = adapter_for_dir(samples_dir / "react_app")
        assert isinstance(adapter, ReactAdapter)
        routes = adapter.discover_routes()
        assert [r.url for r in routes] == [
            "/", "/signin", "/profile/:userId", "/legacy", "/*", "/pricing", "/account/settings",
        ]
        assert [r.component for r in routes] == [
            "Home", "SignIn", "Profile", "Legacy", "NotFound", "Pricing", "AccountSettings",
        ]

    def test_capabilities(self, samples_dir):
        capabilities = adapter_for_dir(samples_dir / "react_app").detect()
        assert capabilities["router_type"] == "react-router-dom"
        assert capabilities["router_version"] == "6.22.0"

    def test_no_router_means_no_routes(self, make_project):
        root = make_project({"src/App.jsx": '<Route path="/x" element={<X />} />'},
                            manifest={"dependencies": {"react": "18"}})
        adapter = adapter_for_dir(root)
        assert isinstance(adapter, ReactAdapter)
        assert adapter.discover_routes() == []


class TestRemixAdapter:

    def test_discovers_route_modules(self, samples_dir):
        adapter = adapter_for_dir(samples_dir / "remix_app")
        assert isinstance(adapter, RemixAdapter)
        assert pairs(adapter.discover_routes()) == [
            ("GET", "/"),
            ("GET", "/app"),
            ("GET", "/auth/login"),
            ("POST", "/auth/login"),
            ("POST", "/webhooks"),
            ("GET", "/app/products/:id"),
        ]

    def test_resource_routes_are_api(self, samples_dir):
        routes = adapter_for_dir(samples_dir / "remix_app").discover_routes()
        kinds = {(r.method, r.url): r.kind for r in routes}
        assert kinds[("POST", "/webhooks")] == RouteKind.API
        assert kinds[("GET", "/app")] == RouteKind.PAGE

    def test_capabilities(self, samples_dir):
        capabilities = adapter_for_dir(samples_dir / "remix_app").detect()
        assert capabilities == {"name": "remix", "has_routes_dir": True, "is_shopify": True}


class TestGenericAdapter:

    def test_static_site(self, samples_dir):
        adapter = adapter_for_dir(samples_dir / "static_site")
        assert isinstance(adapter, GenericAdapter)
        routes = adapter.discover_routes()
        assert [r.url for r in routes] == ["/about", "/", "/docs", "/public/admin"]
        assert all(r.discovery_method == DiscoveryMethod.STATIC_FILE for r in routes)

    def test_pages_components_and_inferred_health(self, make_project):
        root = make_project({
            "src/pages/index.vue": "<template />",
            "src/pages/users/_id.vue": "<template />",
            "src/pages/api/status.js": "",
            "api/README.md": "",
        }, manifest={"dependencies": {"vue": "3.4.0"}})
        adapter = adapter_for_dir(root)
        assert adapter.kind == AdapterKind.GENERIC
        routes = adapter.discover_routes()
        assert pairs(routes) == [
            ("GET", "/"),
            ("GET", "/api/status"),
            ("GET", "/users/_id"),
            ("GET", "/api/health"),
        ]
        health = routes[-1]
        assert health.discovery_method == DiscoveryMethod.INFERRED
        assert health.kind == RouteKind.API
        assert health.source_file is None

    def test_unknown_framework_has_nothing_to_scan(self, make_project):
        adapter = adapter_for_dir(make_project({"notes.txt": "hello"}))
        assert adapter.kind == AdapterKind.GENERIC
        assert adapter.detect() is None
