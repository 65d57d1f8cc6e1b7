APP_NAME = "addon-creator"

# loguru enables and disables records by the emitting module's import path
PACKAGE_NAME = "addon_creator"

BOILERPLATE_URL = "https://github.com/ethan309/clone-test/archive/master.zip"
BOILERPLATE_ARCHIVE_ROOT = "clone-test-master"
DEFAULT_ADDON_NAME = "my-new-local-addon"
