from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.utils.translation import gettext_lazy as _
from django.core.validators import MinValueValidator, MaxValueValidator
import uuid


# ==============================
# Custom User Manager
# ==============================
class UserManager(BaseUserManager):
    """
    Custom user manager that uses email instead of username for authentication.
    """
    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError(_('Users must have an email address'))
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        return self.create_user(email, password, **extra_fields)


# ==============================
# 👤 Custom User Model
# ==============================
class User(AbstractUser):
    """
    Extended User model with UUID and email-based authentication.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255)
    username = models.CharField(max_length=150, unique=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    def __str__(self):
        return self.username or self.email


# ==============================
# Profile Model
# ==============================
class Profile(models.Model):
    """
    Dating profile, one-to-one with the User model.
    Created lazily with defaults the first time it is read or written.
    """

    GENDER_CHOICES = [
        ('male', 'Male'),
        ('female', 'Female'),
        ('non-binary', 'Non-binary'),
        ('other', 'Other'),
    ]

    STATUS_CHOICES = [
        ('active', 'Active'),
        ('inactive', 'Inactive'),
        ('hidden', 'Hidden'),
    ]

    DEFAULT_RADIUS_MILES = 25

    user = models.OneToOneField(
        User, on_delete=models.CASCADE, related_name='profile', primary_key=True
    )
    display_name = models.CharField(max_length=50, null=True, blank=True)
    age = models.PositiveIntegerField(
        null=True, blank=True, validators=[MinValueValidator(18), MaxValueValidator(120)]
    )
    gender = models.CharField(max_length=20, choices=GENDER_CHOICES, null=True, blank=True)
    pronouns = models.CharField(max_length=50, null=True, blank=True)
    bio = models.TextField(max_length=500, null=True, blank=True, help_text=_('Short biography or description'))
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active', db_index=True)

    # Location (decimal degrees)
    location_lat = models.FloatField(
        null=True, blank=True, validators=[MinValueValidator(-90), MaxValueValidator(90)]
    )
    location_lng = models.FloatField(
        null=True, blank=True, validators=[MinValueValidator(-180), MaxValueValidator(180)]
    )
    radius_preference = models.PositiveIntegerField(
        default=DEFAULT_RADIUS_MILES,
        validators=[MinValueValidator(1), MaxValueValidator(500)],
        help_text=_('Discovery radius in miles')
    )

    hobbies = models.ManyToManyField('Hobby', through='ProfileHobby', related_name='profiles', blank=True)

    # Timestamp fields
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'profiles'
        indexes = [
            models.Index(fields=['status', 'gender'], name='profiles_status_gender_idx'),
            models.Index(fields=['location_lat', 'location_lng'], name='profiles_location_idx'),
        ]

    def __str__(self):
        return f"Profile of {self.user.username}"

    # ---------------------
    # Computed Properties
    # ---------------------
    @property
    def has_location(self):
        return self.location_lat is not None and self.location_lng is not None

    @property
    def primary_photo(self):
        """Most recent photo flagged primary, else the most recent photo."""
        photos = self.photos.order_by('-uploaded_at', '-id')
        return photos.filter(is_primary=True).first() or photos.first()


# ==============================
# Profile Photo
# ==============================
class ProfilePhoto(models.Model):
    """
    Stores photo references for a profile. Binary storage lives elsewhere.
    """
    profile = models.ForeignKey(Profile, on_delete=models.CASCADE, related_name='photos')
    url = models.URLField(max_length=500)
    is_primary = models.BooleanField(default=False)
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'profile_photos'
        ordering = ['-is_primary', 'uploaded_at']

    def __str__(self):
        return f"Photo for {self.profile.user.username}"

    def save(self, *args, **kwargs):
        """Ensure the first uploaded photo is set as primary."""
        if not ProfilePhoto.objects.filter(profile=self.profile).exists():
            self.is_primary = True
        super().save(*args, **kwargs)


# ==============================
# Hobbies
# ==============================
class Hobby(models.Model):
    """
    Represents an available hobby (e.g. Running, Photography), grouped by category.
    """
    name = models.CharField(max_length=100, unique=True)
    description = models.CharField(max_length=255, null=True, blank=True)
    category = models.CharField(max_length=100, null=True, blank=True, db_index=True)

    class Meta:
        ordering = ['category', 'name']
        db_table = 'hobbies'
        verbose_name_plural = 'hobbies'

    def __str__(self):
        return self.name


# ==============================
# Profile Hobbies (Many-to-Many)
# ==============================
class ProfileHobby(models.Model):
    """
    Intermediate table connecting profiles to their hobbies.
    """
    profile = models.ForeignKey(Profile, on_delete=models.CASCADE, related_name='profile_hobbies')
    hobby = models.ForeignKey(Hobby, on_delete=models.CASCADE, related_name='profile_hobbies')

    class Meta:
        unique_together = ('profile', 'hobby')
        db_table = 'profile_hobbies'

    def __str__(self):
        return f"{self.profile.user.username} → {self.hobby.name}"


# ==============================
# Device Tokens (push notifications)
# ==============================
class DeviceToken(models.Model):
    """
    Expo push token registered by one of the user's devices.
    """
    PLATFORM_CHOICES = [
        ('ios', 'iOS'),
        ('android', 'Android'),
    ]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='device_tokens')
    token = models.CharField(max_length=255)
    platform = models.CharField(max_length=20, choices=PLATFORM_CHOICES)
    device_type = models.CharField(max_length=100, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'device_tokens'
        unique_together = ('user', 'token')

    def __str__(self):
        return f"{self.user.username} ({self.platform})"
