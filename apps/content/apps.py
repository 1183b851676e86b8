from django.apps import AppConfig
import logging

log = logging.getLogger("apps.content.apps")


class ContentConfig(AppConfig):
    name = "apps.content"
    label = "content"
    verbose_name = "Content resolution"

    def ready(self):
        from .catalog import available_pages

        pages = available_pages()
        if pages:
            log.info("Content specifications available: %s", ", ".join(pages))
        else:
            log.warning("No content specifications found; pages will fail to render")
