"""
Account Serializers
"""
from rest_framework import serializers


class AdminLoginSerializer(serializers.Serializer):

    password = serializers.CharField(
        required=False,
        allow_blank=True,
        trim_whitespace=False,
        help_text="Shared admin password"
    )
