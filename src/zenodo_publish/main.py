import logging
import os
import sys
from typing import Any

import yaml

from .config import ConfigService
from .errors import ConfigError, ZenodoError
from .files import FileService
from .zenodo import ZenodoAPI

logger = logging.getLogger(__name__)


def load_metadata(metadata_file: str) -> Any:
    try:
        with open(metadata_file, encoding="utf-8") as f:
            metadata = yaml.safe_load(f)
        logger.info("Loaded metadata from %s", metadata_file)
        return metadata

    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Metadata load failed: {e}") from e


def run(env: dict) -> int:
    production = env.get("PRODUCTION", "false").lower() == "true"
    metadata_file = env.get("METADATA")
    deposition_id = env.get("DEPOSITION")
    file_ids = env.get("FILE_IDS", "").split()

    api = ZenodoAPI(ConfigService(env.get("ZENODO_CONFIG")), FileService(env.get("STORAGE")))
    api.init(production)

    if not metadata_file and not deposition_id and not file_ids:
        for dep in api.list_depositions():
            logger.info("%s\t%s\t%s", dep.get("id"), dep.get("state", ""), dep.get("title", ""))
        return 0

    if metadata_file:
        result = api.create_deposition(load_metadata(metadata_file))
        if not result.ok:
            logger.error("Zenodo refused the deposition (status %s): %s", result.status, result.message)
            return 1
        deposition_id = result.id

    if file_ids and not deposition_id:
        logger.error("FILE_IDS needs either METADATA or DEPOSITION")
        return 1

    for file_id in file_ids:
        api.upload_file(deposition_id, file_id)

    logger.info("All operations completed successfully")
    return 0


def main() -> None:
    logging.basicConfig(
        level=logging.DEBUG if os.getenv("DEBUG", "false").lower() == "true" else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )

    try:
        status = run(dict(os.environ))
    except ZenodoError as e:
        logger.error("Workflow failed: %s", str(e))
        status = 1

    sys.exit(status)


if __name__ == "__main__":
    main()
