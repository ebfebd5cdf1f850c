"""
Completion notification for repository exports.
"""

from rexport.constants import EVENT_REPOSITORY_EXPORT_COMPLETED
from rexport.exporter.interfaces import EventPublisher
from rexport.exporter.models import Repository
from rexport.logging import get_logger

logger = get_logger("rexport.exporter.notify")


def publish_export_completed(publisher: EventPublisher, repository: Repository) -> bool:
    """
    Tell observers of the owning space that an export ended.

    Publish failures are logged and reported through the return value;
    they never fail the job.
    """
    try:
        publisher.publish(
            repository.parent_id, EVENT_REPOSITORY_EXPORT_COMPLETED, repository
        )
        return True
    except Exception as e:
        logger.warning(
            f"Failed to publish export completion for repository {repository.uid}: {e}"
        )
        return False
