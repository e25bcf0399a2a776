from rest_framework import serializers
from .models import Country


class CountrySerializer(serializers.ModelSerializer):
    class Meta:
        model = Country
        fields = [
            'id', 'name', 'capital', 'region', 'population',
            'currency_code', 'exchange_rate', 'estimated_gdp',
            'flag_url', 'last_refreshed_at'
        ]
        read_only_fields = fields


class StatusSerializer(serializers.Serializer):
    total_countries = serializers.IntegerField()
    last_refreshed_at = serializers.DateTimeField(allow_null=True)


class RefreshResultSerializer(serializers.Serializer):
    processed_count = serializers.IntegerField(source='processed')
    created = serializers.IntegerField()
    updated = serializers.IntegerField()
    total_countries = serializers.IntegerField(source='total')
    last_refreshed_at = serializers.DateTimeField()


# --- External payloads --- #
class CurrencyPayloadSerializer(serializers.Serializer):
    code = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    name = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    symbol = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class RestCountryPayloadSerializer(serializers.Serializer):
    """One entry of restcountries.com/v2/all."""
    name = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    capital = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    region = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    population = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    flag = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    currencies = CurrencyPayloadSerializer(many=True, required=False, allow_null=True)


class ExchangeRatePayloadSerializer(serializers.Serializer):
    """open.er-api.com/v6/latest response body."""
    result = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    base_code = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    rates = serializers.DictField(
        child=serializers.DecimalField(max_digits=None, decimal_places=None),
        required=False,
        allow_null=True,
    )
