# catalog/serializers.py

"""
CATALOG SERIALIZERS

Upstream contract validation:
- The upstream demo API is not ours; every payload is validated here
  before it becomes a Product.
- These serializers are also the response schema for the public endpoints.
"""

from __future__ import annotations

from rest_framework import serializers


class RatingSerializer(serializers.Serializer):
    rate = serializers.FloatField(min_value=0)
    count = serializers.IntegerField(min_value=0)


class ProductSerializer(serializers.Serializer):
    id = serializers.IntegerField(min_value=1)
    title = serializers.CharField()
    price = serializers.FloatField(min_value=0)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    category = serializers.CharField(required=False, allow_blank=True, default="")
    image = serializers.CharField(required=False, allow_blank=True, default="")
    rating = RatingSerializer(required=False, allow_null=True, default=None)


def category_list_field() -> serializers.ListField:
    return serializers.ListField(child=serializers.CharField(allow_blank=False))


class CatalogErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
    products = serializers.ListField(child=serializers.DictField(), required=False)
    categories = serializers.ListField(child=serializers.CharField(), required=False)
    status = serializers.IntegerField(required=False)
    statusText = serializers.CharField(required=False)
