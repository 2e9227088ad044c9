from django.conf import settings
from django.db import models


class Article(models.Model):
    """Industry article imported from an external site by an admin"""
    title = models.CharField(max_length=500)
    author = models.CharField(max_length=255, blank=True, default='')
    description = models.TextField(blank=True, default='')
    content = models.TextField(blank=True, default='')
    source_url = models.URLField(max_length=1000)
    imported_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name='imported_articles')
    imported_at = models.DateTimeField(auto_now_add=True)
    is_published = models.BooleanField(default=True)

    class Meta:
        db_table = 'articles'
        ordering = ['-imported_at', '-id']

    def __str__(self):
        return self.title


class Developer(models.Model):
    """Platform developer profile managed from the admin panel"""
    ROLE_CHOICES = [
        ('frontend', 'Frontend'),
        ('backend', 'Backend'),
        ('fullstack', 'Full Stack'),
        ('mobile', 'Mobile'),
        ('devops', 'DevOps'),
        ('ui_ux', 'UI/UX'),
        ('qa_tester', 'QA Tester'),
        ('project_manager', 'Project Manager'),
        ('tech_lead', 'Tech Lead'),
    ]
    ACCESS_LEVEL_CHOICES = [
        ('read_only', 'Read Only'),
        ('contributor', 'Contributor'),
        ('maintainer', 'Maintainer'),
        ('admin', 'Admin'),
    ]

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='developer_profile')
    github_username = models.CharField(max_length=100, blank=True, null=True)
    role = models.CharField(max_length=30, choices=ROLE_CHOICES)
    access_level = models.CharField(max_length=20, choices=ACCESS_LEVEL_CHOICES, default='read_only')
    skills = models.JSONField(default=list, blank=True)
    hourly_rate = models.DecimalField(max_digits=8, decimal_places=2, blank=True, null=True)
    availability = models.CharField(max_length=50, blank=True, null=True)
    timezone = models.CharField(max_length=50, blank=True, null=True)
    portfolio_url = models.URLField(max_length=500, blank=True, null=True)
    linkedin_url = models.URLField(max_length=500, blank=True, null=True)
    years_experience = models.PositiveIntegerField(blank=True, null=True)
    is_active = models.BooleanField(default=True)
    added_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name='added_developers')
    added_at = models.DateTimeField(auto_now_add=True)
    last_active_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        db_table = 'developers'
        ordering = ['-added_at', '-id']

    def __str__(self):
        return f"{self.user} ({self.role})"


class ProjectAssignment(models.Model):
    STATUS_CHOICES = [
        ('active', 'Active'),
        ('completed', 'Completed'),
        ('paused', 'Paused'),
        ('cancelled', 'Cancelled'),
    ]
    PRIORITY_CHOICES = [
        ('low', 'Low'),
        ('medium', 'Medium'),
        ('high', 'High'),
        ('urgent', 'Urgent'),
    ]

    developer = models.ForeignKey(Developer, on_delete=models.CASCADE, related_name='assignments')
    project_name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active')
    priority = models.CharField(max_length=20, choices=PRIORITY_CHOICES, default='medium')
    estimated_hours = models.PositiveIntegerField(blank=True, null=True)
    actual_hours = models.PositiveIntegerField(blank=True, null=True)
    start_date = models.DateField(blank=True, null=True)
    due_date = models.DateField(blank=True, null=True)
    completed_at = models.DateTimeField(blank=True, null=True)
    assigned_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name='project_assignments_made')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'project_assignments'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.project_name} -> {self.developer}"
