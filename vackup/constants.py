"""
Constants used throughout Vackup.

Engine command templates, in-container mount points and logging formats
live here so the panel, the CLI and the tests agree on them.
"""

# Version information
VERSION = "1.0.0"

# Engine defaults
DEFAULT_ENGINE_BINARY = 'docker'
DEFAULT_HELPER_IMAGE = 'busybox'

# Go templates passed to the engine CLI (no shell, so no surrounding quotes)
VOLUMES_JSON_FORMAT = '{{ json .Volumes }}'
CONTAINER_NAMES_FORMAT = '{{ .Names}}'

# Mount points inside the throwaway export container
CONTAINER_VOLUME_PATH = '/vackup-volume'
CONTAINER_EXPORT_PATH = '/vackup'
ARCHIVE_SUFFIX = '.tar.gz'

# tar prints this when archiving absolute member names; it is not an error
BENIGN_TAR_DIAGNOSTIC = "tar: removing leading '/' from member names"
GNU_TAR_DIAGNOSTIC = "tar: Removing leading `/' from member names"

# Restore from an image: the image ships its data under IMAGE_DATA_PATH
CONTAINER_RESTORE_PATH = '/mount-volume'
IMAGE_DATA_PATH = '/volume-data'

# Dialog properties understood by directory pickers
OPEN_DIRECTORY = 'openDirectory'

# Timeouts (in seconds)
CONTAINER_STOP_TIMEOUT = 10

# Configuration
CONFIG_DIR_NAME = 'vackup'
CONFIG_FILE_NAME = 'config.json'

# Logging
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
