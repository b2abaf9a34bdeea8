"""
Admin Account Views
"""
import logging

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.rate_limiting import get_client_ip

from .policies import get_admin_auth_policy
from .serializers import AdminLoginSerializer

logger = logging.getLogger(__name__)


class AdminLoginView(APIView):
    """
    Exchange the admin password for a bearer token.

    POST /api/v1/admin/login
    """

    authentication_classes = []
    permission_classes = [permissions.AllowAny]
    auth_policy = None

    def get_auth_policy(self):
        return self.auth_policy or get_admin_auth_policy()

    def post(self, request):
        serializer = AdminLoginSerializer(data=request.data)
        password = None
        if serializer.is_valid():
            password = serializer.validated_data.get('password')

        token = self.get_auth_policy().verify(password)
        if token is None:
            logger.warning(f"Failed admin login attempt from {get_client_ip(request)}")
            return Response(
                {'success': False, 'message': 'Invalid password'},
                status=status.HTTP_401_UNAUTHORIZED
            )

        logger.info("Admin logged in")
        return Response({'success': True, 'token': token})
