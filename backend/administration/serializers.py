from rest_framework import serializers
from django.contrib.auth import get_user_model
from backend.core.serializers import UserSummarySerializer
from .models import Article, Developer, ProjectAssignment

User = get_user_model()


class ArticleSerializer(serializers.ModelSerializer):
    imported_by = UserSummarySerializer(read_only=True)

    class Meta:
        model = Article
        fields = ['id', 'title', 'author', 'description', 'content', 'source_url',
                  'imported_by', 'imported_at', 'is_published']
        read_only_fields = ['source_url', 'imported_at']


class DeveloperSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    user_id = serializers.PrimaryKeyRelatedField(source='user', queryset=User.objects.all(), write_only=True)
    added_by = UserSummarySerializer(read_only=True)
    skills = serializers.ListField(child=serializers.CharField(max_length=100), required=False)
    assignment_count = serializers.SerializerMethodField()

    class Meta:
        model = Developer
        fields = [
            'id', 'user', 'user_id', 'github_username', 'role', 'access_level', 'skills', 'hourly_rate',
            'availability', 'timezone', 'portfolio_url', 'linkedin_url', 'years_experience',
            'is_active', 'added_by', 'added_at', 'last_active_at', 'assignment_count',
        ]
        read_only_fields = ['added_at']

    def get_assignment_count(self, obj):
        return obj.assignments.count()

    def validate_user_id(self, value):
        existing = Developer.objects.filter(user=value)
        if self.instance:
            existing = existing.exclude(pk=self.instance.pk)
        if existing.exists():
            raise serializers.ValidationError('This user already has a developer profile.')
        return value


class ProjectAssignmentSerializer(serializers.ModelSerializer):
    developer_id = serializers.PrimaryKeyRelatedField(source='developer', queryset=Developer.objects.all())
    developer_name = serializers.SerializerMethodField()
    assigned_by = UserSummarySerializer(read_only=True)

    class Meta:
        model = ProjectAssignment
        fields = [
            'id', 'developer_id', 'developer_name', 'project_name', 'description', 'status', 'priority',
            'estimated_hours', 'actual_hours', 'start_date', 'due_date', 'completed_at',
            'assigned_by', 'created_at',
        ]
        read_only_fields = ['completed_at', 'created_at']

    def get_developer_name(self, obj):
        return str(obj.developer.user)

    def validate(self, attrs):
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        due = attrs.get('due_date', getattr(self.instance, 'due_date', None))
        if start and due and due < start:
            raise serializers.ValidationError({'due_date': 'Due date cannot be before the start date.'})
        return attrs
