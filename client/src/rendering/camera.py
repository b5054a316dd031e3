"""
Camera management.

Handles viewport positioning, smooth following, and the world view
rectangle used to decide which map chunks to stream in.
"""

from typing import Optional, Tuple

from common.src.chunk_manifest import ViewRectangle

from ..config import get_config


class Camera:
    """
    World camera centred on a target point.

    Supports smooth interpolation and handles coordinate transformations.
    """

    def __init__(self, screen_width: int, screen_height: int, follow_speed: Optional[float] = None):
        self.screen_width = screen_width
        self.screen_height = screen_height

        # Camera position (center of screen in world coordinates)
        self.x: float = 0.0
        self.y: float = 0.0

        # Target position (where we want to be)
        self.target_x: float = 0.0
        self.target_y: float = 0.0

        # Smooth follow speed (higher = snappier)
        if follow_speed is None:
            follow_speed = get_config().camera.follow_speed
        self.follow_speed: float = follow_speed

    def update_target(self, world_x: float, world_y: float) -> None:
        """Update the point the camera follows."""
        self.target_x = world_x
        self.target_y = world_y

    def center_on(self, world_x: float, world_y: float) -> None:
        """Jump straight to a point, skipping interpolation."""
        self.x = self.target_x = world_x
        self.y = self.target_y = world_y

    def update(self, delta_time: float) -> None:
        """Update camera position with smooth interpolation."""
        dx = self.target_x - self.x
        dy = self.target_y - self.y

        # Clamp so a long frame never overshoots the target
        step = min(self.follow_speed * delta_time, 1.0)
        self.x += dx * step
        self.y += dy * step

    def world_to_screen(self, world_x: float, world_y: float) -> Tuple[float, float]:
        """
        Convert world coordinates to screen coordinates.

        Args:
            world_x: X position in world units
            world_y: Y position in world units

        Returns:
            (screen_x, screen_y) tuple
        """
        screen_x = world_x - self.x + self.screen_width / 2
        screen_y = world_y - self.y + self.screen_height / 2
        return (screen_x, screen_y)

    def screen_to_world(self, screen_x: float, screen_y: float) -> Tuple[float, float]:
        """
        Convert screen coordinates to world coordinates.

        Args:
            screen_x: X position on screen
            screen_y: Y position on screen

        Returns:
            (world_x, world_y) tuple in world coordinates
        """
        world_x = screen_x + self.x - self.screen_width / 2
        world_y = screen_y + self.y - self.screen_height / 2
        return (world_x, world_y)

    @property
    def world_view(self) -> ViewRectangle:
        """The world-space rectangle currently on screen."""
        left, top = self.screen_to_world(0, 0)
        return ViewRectangle(
            top=top,
            left=left,
            right=left + self.screen_width,
            bottom=top + self.screen_height,
        )

    def is_on_screen(self, world_x: float, world_y: float, margin: int = 0) -> bool:
        """Check if a world position is visible on screen."""
        screen_x, screen_y = self.world_to_screen(world_x, world_y)
        return (-margin <= screen_x <= self.screen_width + margin and
                -margin <= screen_y <= self.screen_height + margin)

    def handle_resize(self, width: int, height: int) -> None:
        """Handle window resize."""
        self.screen_width = width
        self.screen_height = height
