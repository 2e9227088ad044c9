import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import AllowAny, IsAuthenticated
from django.db.models import ProtectedError
from django.shortcuts import get_object_or_404
from backend.core.cache_utils import (
    cached_query, get_cached_gemstones_list, cache_gemstones_list,
    CATALOG_LOOKUP_CACHE_TTL, CATEGORIES_LIST_PREFIX, SUPPLIERS_LIST_PREFIX,
)
from backend.core.permissions import IsPlatformAdmin
from .filters import GemstoneFilter
from .models import Supplier, GemstoneCategory, Gemstone
from .serializers import SupplierSerializer, GemstoneCategorySerializer, GemstoneSerializer

logger = logging.getLogger(__name__)


class CatalogWritePermission(IsPlatformAdmin):
    """Anyone may read the catalog; only platform admins may change it"""
    def has_permission(self, request, view):
        if request.method in ('GET', 'HEAD', 'OPTIONS'):
            return True
        return super().has_permission(request, view)


@cached_query(cache_ttl=CATALOG_LOOKUP_CACHE_TTL, key_prefix=CATEGORIES_LIST_PREFIX)
def get_categories_data():
    return GemstoneCategorySerializer(GemstoneCategory.objects.all(), many=True).data


@cached_query(cache_ttl=CATALOG_LOOKUP_CACHE_TTL, key_prefix=SUPPLIERS_LIST_PREFIX)
def get_suppliers_data():
    return SupplierSerializer(Supplier.objects.all(), many=True).data


def filtered_gemstones_response(query_params, base_queryset=None):
    """Apply GemstoneFilter and serve the result from cache when possible"""
    filters_dict = {key: query_params.get(key) for key in sorted(query_params.keys())}
    if base_queryset is None:
        cached_data, cache_key = get_cached_gemstones_list(filters_dict)
        if cached_data is not None:
            return Response(cached_data)

    queryset = base_queryset if base_queryset is not None else Gemstone.objects.all()
    filterset = GemstoneFilter(query_params, queryset=queryset.select_related('supplier', 'category'))
    if not filterset.is_valid():
        return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)
    data = GemstoneSerializer(filterset.qs, many=True).data

    if base_queryset is None:
        cache_gemstones_list(cache_key, data)
    return Response(data)


# Category views
@api_view(['GET', 'POST'])
@permission_classes([CatalogWritePermission])
def category_list_create(request):
    """List gemstone categories or create one"""
    if request.method == 'GET':
        return Response(get_categories_data())
    serializer = GemstoneCategorySerializer(data=request.data)
    if serializer.is_valid():
        serializer.save()
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([CatalogWritePermission])
def category_detail(request, pk):
    """Retrieve, update or delete a gemstone category"""
    category = get_object_or_404(GemstoneCategory, pk=pk)

    if request.method == 'GET':
        return Response(GemstoneCategorySerializer(category).data)
    elif request.method == 'PATCH':
        serializer = GemstoneCategorySerializer(category, data=request.data, partial=True)
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        try:
            category.delete()
        except ProtectedError:
            return Response({'error': 'Category still has gemstones'}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes([AllowAny])
def category_gemstones(request, pk):
    category = get_object_or_404(GemstoneCategory, pk=pk)
    return filtered_gemstones_response(request.query_params, Gemstone.objects.filter(category=category))


# Supplier views
@api_view(['GET', 'POST'])
@permission_classes([CatalogWritePermission])
def supplier_list_create(request):
    """List suppliers or create one"""
    if request.method == 'GET':
        return Response(get_suppliers_data())
    serializer = SupplierSerializer(data=request.data)
    if serializer.is_valid():
        serializer.save()
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([CatalogWritePermission])
def supplier_detail(request, pk):
    """Retrieve, update or delete a supplier"""
    supplier = get_object_or_404(Supplier, pk=pk)

    if request.method == 'GET':
        return Response(SupplierSerializer(supplier).data)
    elif request.method == 'PATCH':
        serializer = SupplierSerializer(supplier, data=request.data, partial=True)
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        try:
            supplier.delete()
        except ProtectedError:
            return Response({'error': 'Supplier has gemstones on existing orders'}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes([AllowAny])
def supplier_gemstones(request, pk):
    supplier = get_object_or_404(Supplier, pk=pk)
    return filtered_gemstones_response(request.query_params, Gemstone.objects.filter(supplier=supplier))


# Gemstone views
@api_view(['GET', 'POST'])
@permission_classes([CatalogWritePermission])
def gemstone_list_create(request):
    """List gemstones with filters or create one"""
    if request.method == 'GET':
        return filtered_gemstones_response(request.query_params)

    serializer = GemstoneSerializer(data=request.data)
    if serializer.is_valid():
        gemstone = serializer.save()
        logger.info(f"Gemstone {gemstone.pk} '{gemstone.name}' created by {request.user.username}")
        return Response(GemstoneSerializer(gemstone).data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([CatalogWritePermission])
def gemstone_detail(request, pk):
    """Retrieve, update or delete a gemstone"""
    gemstone = get_object_or_404(Gemstone.objects.select_related('supplier', 'category'), pk=pk)

    if request.method == 'GET':
        return Response(GemstoneSerializer(gemstone).data)
    elif request.method == 'PATCH':
        serializer = GemstoneSerializer(gemstone, data=request.data, partial=True)
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        try:
            gemstone.delete()
        except ProtectedError:
            return Response(
                {'error': 'Gemstone is on existing orders; mark it unavailable instead'},
                status=status.HTTP_400_BAD_REQUEST
            )
        return Response(status=status.HTTP_204_NO_CONTENT)
