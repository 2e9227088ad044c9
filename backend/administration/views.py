import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from django.contrib.auth import get_user_model
from django.db.models import Count, Q, Sum
from django.shortcuts import get_object_or_404
from django.utils import timezone
from backend.core.models import AuditLog
from backend.core.permissions import IsPlatformAdmin
from backend.core.serializers import AdminUserUpdateSerializer, AuditLogSerializer
from backend.core.utils import create_audit_log
from backend.directory.models import ProfilePhoto
from backend.directory.utils import add_profile_photo, change_profile_photo
from backend.events.models import Event
from backend.gemstones.models import Gemstone
from backend.group_purchases.models import GroupPurchase
from backend.marketplace.models import Listing
from backend.network.models import Connection, Message
from backend.orders.models import Order
from .content_import import ContentFetchError, is_valid_url, preview_content, import_content
from .models import Article, Developer, ProjectAssignment
from .serializers import ArticleSerializer, DeveloperSerializer, ProjectAssignmentSerializer

User = get_user_model()
logger = logging.getLogger(__name__)


# User management
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def admin_user_list(request):
    """All users including email and account flags"""
    queryset = User.objects.all().order_by('username')
    query = request.query_params.get('q', '').strip()
    if query:
        queryset = queryset.filter(
            Q(username__icontains=query) |
            Q(full_name__icontains=query) |
            Q(email__icontains=query) |
            Q(company__icontains=query)
        )
    return Response(AdminUserUpdateSerializer(queryset, many=True).data)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def admin_user_detail(request, pk):
    """Retrieve, update or delete any user"""
    user = get_object_or_404(User, pk=pk)

    if request.method == 'GET':
        return Response(AdminUserUpdateSerializer(user).data)
    elif request.method == 'PATCH':
        old_premium = user.is_premium
        serializer = AdminUserUpdateSerializer(user, data=request.data, partial=True)
        if serializer.is_valid():
            serializer.save()
            changed = {field: request.data[field] for field in serializer.validated_data if field in request.data}
            create_audit_log(
                request=request,
                action='premium_change' if user.is_premium != old_premium else 'update',
                model_name='User',
                object_id=user.pk,
                object_name=user.username,
                changes=changed,
            )
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        if user.pk == request.user.pk:
            return Response({'error': 'You cannot delete your own account'}, status=status.HTTP_400_BAD_REQUEST)
        username = user.username
        user_id = user.pk
        user.delete()
        create_audit_log(request=request, action='delete', model_name='User',
                         object_id=user_id, object_name=username)
        logger.info(f"User {username} (id={user_id}) deleted by {request.user.username}")
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def admin_user_photo_create(request, pk):
    """Add a profile photo to any user"""
    user = get_object_or_404(User, pk=pk)
    return add_profile_photo(user, request.data)


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def admin_user_photo_detail(request, pk, photo_pk):
    """Edit or remove one of a user's profile photos"""
    photo = get_object_or_404(ProfilePhoto, pk=photo_pk, user_id=pk)
    response = change_profile_photo(photo, request)
    if response.status_code < 400:
        create_audit_log(
            request=request,
            action='update' if request.method == 'PATCH' else 'delete',
            model_name='ProfilePhoto',
            object_id=photo_pk,
            changes={'user_id': pk, 'fields': sorted(request.data.keys())},
        )
    return response


# Article import
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def admin_preview_content(request):
    """Fetch a page and return its title, author, description and a text preview"""
    url = request.data.get('url')
    if not is_valid_url(url):
        return Response({'error': 'Valid URL is required'}, status=status.HTTP_400_BAD_REQUEST)
    try:
        data = preview_content(url.strip())
    except ContentFetchError as e:
        return Response({'error': 'Failed to preview content', 'details': str(e)}, status=status.HTTP_502_BAD_GATEWAY)
    return Response(data)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def admin_import_article(request):
    """Fetch a page and save it as an article"""
    url = request.data.get('url')
    if not is_valid_url(url):
        return Response({'error': 'Valid URL is required'}, status=status.HTTP_400_BAD_REQUEST)
    url = url.strip()
    try:
        data = import_content(url)
    except ContentFetchError as e:
        return Response({'error': 'Failed to import article', 'details': str(e)}, status=status.HTTP_502_BAD_GATEWAY)

    article = Article.objects.create(source_url=url, imported_by=request.user, **data)
    create_audit_log(request=request, action='article_import', model_name='Article',
                     object_id=article.pk, object_name=article.title,
                     changes={'source_url': url})
    logger.info(f"Article imported: '{article.title}' by {article.author} from {url}")
    return Response(ArticleSerializer(article).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def admin_article_list(request):
    articles = Article.objects.select_related('imported_by')
    return Response(ArticleSerializer(articles, many=True).data)


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def admin_article_detail(request, pk):
    """Edit or delete an imported article"""
    article = get_object_or_404(Article, pk=pk)

    if request.method == 'PATCH':
        serializer = ArticleSerializer(article, data=request.data, partial=True)
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        create_audit_log(request=request, action='delete', model_name='Article',
                         object_id=article.pk, object_name=article.title)
        article.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes([AllowAny])
def article_list(request):
    """Published articles for the home page"""
    articles = Article.objects.filter(is_published=True).select_related('imported_by')
    return Response(ArticleSerializer(articles, many=True).data)


# Developer management
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def developer_list_create(request):
    """List developers or add one"""
    if request.method == 'GET':
        queryset = Developer.objects.select_related('user', 'added_by')
        role = request.query_params.get('role', None)
        if role:
            queryset = queryset.filter(role=role)
        active = request.query_params.get('active', None)
        if active in ('true', 'false'):
            queryset = queryset.filter(is_active=(active == 'true'))
        return Response(DeveloperSerializer(queryset, many=True).data)

    serializer = DeveloperSerializer(data=request.data)
    if serializer.is_valid():
        developer = serializer.save(added_by=request.user)
        create_audit_log(request=request, action='create', model_name='Developer',
                         object_id=developer.pk, object_name=str(developer.user),
                         changes={'role': developer.role, 'access_level': developer.access_level})
        return Response(DeveloperSerializer(developer).data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def developer_detail(request, pk):
    """Retrieve, update or delete a developer"""
    developer = get_object_or_404(Developer.objects.select_related('user', 'added_by'), pk=pk)

    if request.method == 'GET':
        return Response(DeveloperSerializer(developer).data)
    elif request.method == 'PATCH':
        serializer = DeveloperSerializer(developer, data=request.data, partial=True)
        if serializer.is_valid():
            serializer.save()
            create_audit_log(request=request, action='update', model_name='Developer',
                             object_id=developer.pk, object_name=str(developer.user),
                             changes={field: str(value) for field, value in serializer.validated_data.items()})
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        create_audit_log(request=request, action='delete', model_name='Developer',
                         object_id=developer.pk, object_name=str(developer.user))
        developer.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def assignment_list_create(request):
    """List project assignments or create one"""
    if request.method == 'GET':
        queryset = ProjectAssignment.objects.select_related('developer__user', 'assigned_by')
        developer_id = request.query_params.get('developer', None)
        if developer_id:
            queryset = queryset.filter(developer_id=developer_id)
        status_filter = request.query_params.get('status', None)
        if status_filter:
            queryset = queryset.filter(status=status_filter)
        return Response(ProjectAssignmentSerializer(queryset, many=True).data)

    serializer = ProjectAssignmentSerializer(data=request.data)
    if serializer.is_valid():
        completed_at = timezone.now() if serializer.validated_data.get('status') == 'completed' else None
        assignment = serializer.save(assigned_by=request.user, completed_at=completed_at)
        return Response(ProjectAssignmentSerializer(assignment).data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def assignment_detail(request, pk):
    """Retrieve or update a project assignment"""
    assignment = get_object_or_404(ProjectAssignment.objects.select_related('developer__user'), pk=pk)

    if request.method == 'GET':
        return Response(ProjectAssignmentSerializer(assignment).data)

    serializer = ProjectAssignmentSerializer(assignment, data=request.data, partial=True)
    if serializer.is_valid():
        new_status = serializer.validated_data.get('status', assignment.status)
        extra = {}
        if new_status == 'completed' and assignment.completed_at is None:
            extra['completed_at'] = timezone.now()
        elif new_status != 'completed':
            extra['completed_at'] = None
        serializer.save(**extra)
        return Response(serializer.data)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


# Dashboard
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def admin_stats(request):
    """Platform-wide counts for the admin dashboard"""
    users_by_type = {
        row['user_type']: row['count']
        for row in User.objects.values('user_type').annotate(count=Count('id')).order_by('user_type')
    }
    orders_by_status = {
        row['status']: row['count']
        for row in Order.objects.values('status').annotate(count=Count('id')).order_by('status')
    }
    revenue = Order.objects.exclude(status='cancelled').aggregate(total=Sum('total_amount'))['total'] or 0

    return Response({
        'users': {
            'total': User.objects.count(),
            'premium': User.objects.filter(is_premium=True).count(),
            'by_type': users_by_type,
        },
        'connections': {
            'total': Connection.objects.count(),
            'accepted': Connection.objects.filter(status=Connection.STATUS_ACCEPTED).count(),
            'pending': Connection.objects.filter(status=Connection.STATUS_PENDING).count(),
        },
        'messages': Message.objects.count(),
        'events': {
            'total': Event.objects.count(),
            'upcoming': Event.objects.filter(date__gte=timezone.localdate()).count(),
        },
        'gemstones': {
            'total': Gemstone.objects.count(),
            'available': Gemstone.objects.filter(is_available=True).count(),
        },
        'orders': {
            'total': Order.objects.count(),
            'by_status': orders_by_status,
            'revenue': str(revenue),
        },
        'listings': Listing.objects.count(),
        'open_group_purchases': GroupPurchase.objects.filter(status='open').count(),
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def audit_log_list(request):
    """List audit logs with filtering"""
    queryset = AuditLog.objects.select_related('user')

    action_filter = request.query_params.get('action', None)
    if action_filter:
        queryset = queryset.filter(action=action_filter)

    model_filter = request.query_params.get('model', None)
    if model_filter:
        queryset = queryset.filter(model_name=model_filter)

    date_from = request.query_params.get('date_from', None)
    date_to = request.query_params.get('date_to', None)
    if date_from:
        queryset = queryset.filter(created_at__date__gte=date_from)
    if date_to:
        queryset = queryset.filter(created_at__date__lte=date_to)

    queryset = queryset.order_by('-created_at')
    return Response(AuditLogSerializer(queryset, many=True).data)
