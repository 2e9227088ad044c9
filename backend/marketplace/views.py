from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from django.shortcuts import get_object_or_404
from .filters import ListingFilter
from .models import Listing
from .serializers import ListingSerializer


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticatedOrReadOnly])
def listing_list_create(request):
    """Browse marketplace listings or post a new one"""
    if request.method == 'GET':
        filterset = ListingFilter(request.query_params, queryset=Listing.objects.select_related('user'))
        if not filterset.is_valid():
            return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)
        return Response(ListingSerializer(filterset.qs, many=True).data)

    serializer = ListingSerializer(data=request.data)
    if serializer.is_valid():
        serializer.save(user=request.user)
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_listings(request):
    listings = Listing.objects.filter(user=request.user).select_related('user')
    return Response(ListingSerializer(listings, many=True).data)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticatedOrReadOnly])
def listing_detail(request, pk):
    """Retrieve, update or delete a listing"""
    listing = get_object_or_404(Listing.objects.select_related('user'), pk=pk)

    if request.method == 'GET':
        return Response(ListingSerializer(listing).data)

    if listing.user_id != request.user.pk:
        return Response({'error': 'You can only modify your own listings'}, status=status.HTTP_403_FORBIDDEN)

    if request.method == 'PATCH':
        serializer = ListingSerializer(listing, data=request.data, partial=True)
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        listing.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
