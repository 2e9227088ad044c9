from django.contrib import admin
from .models import Article, Developer, ProjectAssignment


@admin.register(Article)
class ArticleAdmin(admin.ModelAdmin):
    list_display = ['title', 'author', 'source_url', 'is_published', 'imported_at']
    list_filter = ['is_published', 'imported_at']
    search_fields = ['title', 'author', 'source_url']
    ordering = ['-imported_at']


class ProjectAssignmentInline(admin.TabularInline):
    model = ProjectAssignment
    fk_name = 'developer'
    extra = 0


@admin.register(Developer)
class DeveloperAdmin(admin.ModelAdmin):
    list_display = ['user', 'role', 'access_level', 'is_active', 'added_at']
    list_filter = ['role', 'access_level', 'is_active']
    search_fields = ['user__username', 'github_username']
    inlines = [ProjectAssignmentInline]
