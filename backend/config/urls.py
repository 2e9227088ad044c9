"""
URL configuration for the JewelConnect backend.

Every app mounts its routes under /api/. The chat WebSocket lives in
backend.network.routing and is wired up in asgi.py.
"""
from django.contrib import admin
from django.urls import path, include, re_path
from django.conf import settings
from django.views.static import serve

admin.site.site_header = "JewelConnect Admin Panel"
admin.site.site_title = "JewelConnect Admin Portal"
admin.site.index_title = "Welcome to the JewelConnect Admin Portal"

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('backend.core.urls')),
    path('api/', include('backend.directory.urls')),
    path('api/', include('backend.network.urls')),
    path('api/', include('backend.events.urls')),
    path('api/', include('backend.inventory.urls')),
    path('api/', include('backend.gemstones.urls')),
    path('api/', include('backend.orders.urls')),
    path('api/', include('backend.marketplace.urls')),
    path('api/', include('backend.group_purchases.urls')),
    path('api/', include('backend.administration.urls')),
    re_path(r'^media/(?P<path>.*)$', serve, {'document_root': settings.MEDIA_ROOT}),
    re_path(r'^static/(?P<path>.*)$', serve, {'document_root': settings.STATIC_ROOT}),
]
