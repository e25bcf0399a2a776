from django.core.management.base import BaseCommand, CommandError

from countries.exceptions import CatalogError
from countries.image_utils import generate_summary_image
from countries.queries import summary
from countries.services import refresh_country_data


class Command(BaseCommand):
    help = "Fetch countries and exchange rates, update the catalog and the summary image."

    def add_arguments(self, parser):
        parser.add_argument(
            "--no-image",
            action="store_true",
            help="Skip regenerating the summary image.",
        )

    def handle(self, *args, **options):
        try:
            result = refresh_country_data()
        except CatalogError as e:
            raise CommandError(str(e)) from e

        if not options["no_image"]:
            path = generate_summary_image(*summary())
            self.stdout.write(f"Summary image: {path}")

        self.stdout.write(self.style.SUCCESS(
            f"Processed {result.processed} countries "
            f"({result.created} created, {result.updated} updated) "
            f"at {result.last_refreshed_at.isoformat()}"
        ))
