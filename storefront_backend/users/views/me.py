from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import UserRateThrottle
from rest_framework.views import APIView

from users.serializers import UserSerializer


class MeUserThrottle(UserRateThrottle):
    scope = "user"


class MeView(APIView):
    """
    Current session. 401 {"error": "Unauthorized"} when there is none.
    """

    permission_classes = [IsAuthenticated]
    throttle_classes = [MeUserThrottle]
    serializer_class = UserSerializer

    @extend_schema(
        responses={200: UserSerializer},
        description="Get the currently signed-in user",
    )
    def get(self, request):
        return Response(UserSerializer(request.user).data)
