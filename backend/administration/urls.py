from django.urls import path
from .views import (
    admin_user_list, admin_user_detail, admin_user_photo_create, admin_user_photo_detail,
    admin_preview_content, admin_import_article, admin_article_list, admin_article_detail, article_list,
    developer_list_create, developer_detail, assignment_list_create, assignment_detail,
    admin_stats, audit_log_list,
)

urlpatterns = [
    # User management
    path('admin/users/', admin_user_list, name='admin-user-list'),
    path('admin/users/<int:pk>/', admin_user_detail, name='admin-user-detail'),
    path('admin/users/<int:pk>/photos/', admin_user_photo_create, name='admin-user-photo-create'),
    path('admin/users/<int:pk>/photos/<int:photo_pk>/', admin_user_photo_detail, name='admin-user-photo-detail'),

    # Articles
    path('admin/preview-content/', admin_preview_content, name='admin-preview-content'),
    path('admin/import-article/', admin_import_article, name='admin-import-article'),
    path('admin/articles/', admin_article_list, name='admin-article-list'),
    path('admin/articles/<int:pk>/', admin_article_detail, name='admin-article-detail'),
    path('articles/', article_list, name='article-list'),

    # Developers
    path('admin/developers/', developer_list_create, name='developer-list-create'),
    path('admin/developers/<int:pk>/', developer_detail, name='developer-detail'),
    path('admin/project-assignments/', assignment_list_create, name='assignment-list-create'),
    path('admin/project-assignments/<int:pk>/', assignment_detail, name='assignment-detail'),

    # Dashboard
    path('admin/stats/', admin_stats, name='admin-stats'),
    path('admin/audit-logs/', audit_log_list, name='audit-log-list'),
]
