from django.contrib import admin
from django.urls import path, include

from users.urls import admin_urlpatterns as admin_user_urlpatterns

urlpatterns = [
    # Django admin lives behind the dashboard guard
    path('dashboard/admin/', admin.site.urls),
    path('api/auth/', include('authx.urls')),
    path('api/admin/', include(admin_user_urlpatterns)),
    path('api/user/', include('users.urls')),
    path('api/', include('games.urls')),
    path('api/', include('teams.urls')),
    path('api/', include('core.urls')),
]
