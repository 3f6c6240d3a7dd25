"""
Well-known names used by the default convention set.

Every value here is only a default: ConventionConfig lets a project
override each of them from pyproject.toml.
"""

WEBTEST_PREFIX: str = "webtest."

# Marker used in messages when a class declares no parent.
NO_PARENT: str = "none"

TEST_SUFFIX: str = "Test"
# Namespace segments removed when inferring a tested class from a test class name.
NAME_INFERENCE_SEGMENTS: tuple[str, ...] = ("Tests", "tests", "Test", "test")
CONTROLLER_SUFFIX: str = "Controller"

COVERS_CLASS_ATTRIBUTE: str = "PHPUnit\\Framework\\Attributes\\CoversClass"
RUN_IN_SEPARATE_PROCESS_ATTRIBUTE: str = (
    "PHPUnit\\Framework\\Attributes\\RunTestsInSeparateProcesses"
)

WEB_TEST_BASE: str = "Tourze\\PHPUnitSymfonyWebTest\\AbstractWebTestCase"
EASYADMIN_CONTROLLER_TEST_BASE: str = (
    "Tourze\\PHPUnitSymfonyWebTest\\AbstractEasyAdminControllerTestCase"
)
MENU_TEST_BASE: str = "Tourze\\PHPUnitSymfonyWebTest\\AbstractEasyAdminMenuTestCase"
MENU_PROVIDER_INTERFACE: str = "Tourze\\EasyAdminMenuBundle\\Service\\MenuProviderInterface"

ABSTRACT_CONTROLLER: str = "Symfony\\Bundle\\FrameworkBundle\\Controller\\AbstractController"
LEGACY_CONTROLLER: str = "Symfony\\Bundle\\FrameworkBundle\\Controller\\Controller"
CONTROLLER_INTERFACE: str = "Symfony\\Component\\HttpKernel\\Controller\\ControllerInterface"
CONTROLLER_TRAIT: str = "Symfony\\Bundle\\FrameworkBundle\\Controller\\ControllerTrait"
RESPONSE_CLASS: str = "Symfony\\Component\\HttpFoundation\\Response"
ROUTE_ATTRIBUTE: str = "Symfony\\Component\\Routing\\Attribute\\Route"

ABSTRACT_CRUD_CONTROLLER: str = (
    "EasyCorp\\Bundle\\EasyAdminBundle\\Controller\\AbstractCrudController"
)
ABSTRACT_DASHBOARD_CONTROLLER: str = (
    "EasyCorp\\Bundle\\EasyAdminBundle\\Controller\\AbstractDashboardController"
)
ADMIN_ACTION_ATTRIBUTE: str = "EasyCorp\\Bundle\\EasyAdminBundle\\Attribute\\AdminAction"
ADMIN_CRUD_ATTRIBUTE: str = "EasyCorp\\Bundle\\EasyAdminBundle\\Attribute\\AdminCrud"

DEFAULT_CONTROLLER_BASES: tuple[str, ...] = (
    ABSTRACT_CONTROLLER,
    LEGACY_CONTROLLER,
    ABSTRACT_CRUD_CONTROLLER,
    ABSTRACT_DASHBOARD_CONTROLLER,
    CONTROLLER_INTERFACE,
)

ADMIN_ACTION_REQUIRED_ARGUMENTS: tuple[str, ...] = ("routeName", "routePath")

FLASH_METHOD: str = "addFlash"
FLASH_RECEIVERS: tuple[str, ...] = ("this", "self")
ALLOWED_FLASH_TYPES: tuple[str, ...] = (
    "primary",
    "secondary",
    "success",
    "danger",
    "warning",
    "info",
    "light",
    "dark",
)
# Blocked literal -> suggested replacement.
BLOCKED_FLASH_TYPES: tuple[tuple[str, str], ...] = (("error", "danger"),)

INVOKABLE_METHODS: tuple[str, ...] = ("__invoke",)

# Scalar return-type tokens that can never be a Response.
SCALAR_RETURN_TYPES: frozenset[str] = frozenset(
    {
        "void",
        "never",
        "null",
        "string",
        "int",
        "float",
        "bool",
        "array",
        "iterable",
        "mixed",
        "None",
        "str",
        "bytes",
        "dict",
        "list",
        "tuple",
    }
)

# Pylint message codes, one per violation kind.
CODE_CONTROLLER_TEST_BASE: str = "W9501"
CODE_RUN_IN_SEPARATE_PROCESS: str = "W9502"
CODE_INVOKE_RESPONSE: str = "W9503"
CODE_ADMIN_ACTION_ROUTE_PARAMETERS: str = "W9504"
CODE_ADMIN_ACTION_ROUTE_CONFLICT: str = "W9505"
CODE_ADMIN_CRUD_ATTRIBUTE: str = "W9506"
CODE_FLASH_BLOCKED_TYPE: str = "W9507"
CODE_FLASH_INVALID_TYPE: str = "W9508"
CODE_BATCH_ACTION_TEST: str = "W9509"
CODE_CUSTOM_ACTION_COVERAGE: str = "W9510"
CODE_FILTER_COVERAGE: str = "W9511"
CODE_REQUIRED_FIELD_VALIDATION: str = "W9512"
CODE_MENU_PROVIDER_TEST_BASE: str = "W9513"

# Stable dotted identifiers, keyed by message code.
IDENTIFIERS: dict[str, str] = {
    CODE_CONTROLLER_TEST_BASE: "webTest.controllerTest.mustExtendWebTestCase",
    CODE_RUN_IN_SEPARATE_PROCESS: "webTest.requireRunInSeparateProcess",
    CODE_INVOKE_RESPONSE: "controller.invokeResponse",
    CODE_ADMIN_ACTION_ROUTE_PARAMETERS: "easyadmin.admin.action.route.parameters",
    CODE_ADMIN_ACTION_ROUTE_CONFLICT: "easyadmin.admin.action.routeConflict",
    CODE_ADMIN_CRUD_ATTRIBUTE: "webTest.requireAdminCrudAttribute",
    CODE_FLASH_BLOCKED_TYPE: "easyadmin.flash.blockedType",
    CODE_FLASH_INVALID_TYPE: "easyadmin.flash.invalidType",
    CODE_BATCH_ACTION_TEST: "webTest.easyAdminBatchActionTest",
    CODE_CUSTOM_ACTION_COVERAGE: "webTest.easyAdminCustomActionTestCoverage",
    CODE_FILTER_COVERAGE: "webTest.easyAdminFilterTestCoverage",
    CODE_REQUIRED_FIELD_VALIDATION: "webTest.easyAdminRequiredFieldValidationTest",
    CODE_MENU_PROVIDER_TEST_BASE: "easyAdmin.menuProviderTest.mustInheritMenuTestCase",
}

CODE_BY_IDENTIFIER: dict[str, str] = {v: k for k, v in IDENTIFIERS.items()}
