from django.db import models


def country_name_key(name):
    """Case-folded form of a country name; unique per country."""
    return name.strip().casefold()


class Country(models.Model):
    """Stores information about a single country."""
    name = models.CharField(max_length=255, unique=True)
    name_key = models.CharField(max_length=255, unique=True, editable=False)
    capital = models.CharField(max_length=255, null=True, blank=True)
    region = models.CharField(max_length=100, null=True, blank=True, db_index=True)
    population = models.PositiveBigIntegerField(default=0)

    currency_code = models.CharField(max_length=10, null=True, blank=True, db_index=True)
    exchange_rate = models.DecimalField(max_digits=20, decimal_places=6, blank=True, null=True)
    estimated_gdp = models.DecimalField(max_digits=30, decimal_places=2, blank=True, null=True, db_index=True)

    flag_url = models.URLField(max_length=500, blank=True, null=True)
    last_refreshed_at = models.DateTimeField()

    class Meta:
        verbose_name_plural = "countries"

    def save(self, *args, **kwargs):
        self.name_key = country_name_key(self.name)
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name


class SystemMetadata(models.Model):
    """Key/value rows for catalog-wide state such as the refresh watermark."""
    key_name = models.CharField(max_length=100, unique=True)
    key_value = models.TextField(null=True, blank=True)
    updated_at = models.DateTimeField()

    class Meta:
        verbose_name_plural = "system metadata"

    def __str__(self):
        return f"{self.key_name} = {self.key_value}"
