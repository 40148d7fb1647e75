#!/usr/bin/env python3
"""Ride request card, navigation header, debug overlay and pause banner (mixin)."""

from __future__ import annotations

import pygame

from .helpers import draw_alpha_rect
from .types import ButtonRect


class HudRenderer:
    """Mixin that draws every overlay / HUD element."""

    # ------------------------------------------------------------------ #
    #  Ride request card (home screen)                                     #
    # ------------------------------------------------------------------ #

    def _accept_button(self) -> ButtonRect:
        w, h = 220, 44
        return ButtonRect("ACCEPT", (self.width - w) // 2, self.height - h - 32, w, h)

    def _draw_request_card(self, surface: pygame.Surface) -> None:
        if self.font_small is None or self.font_title is None:
            return
        btn = self._accept_button()
        card = pygame.Rect(16, btn.y - 96, self.width - 32, btn.h + 112)
        draw_alpha_rect(surface, self.HUD_BG_COLOR, card, border_radius=10)
        pygame.draw.rect(surface, self.HUD_BORDER_COLOR, card, width=1, border_radius=10)

        title = self.font_title.render("New ride request", True, self.HUD_TEXT_COLOR)
        surface.blit(title, (card.x + 16, card.y + 12))
        sub = self.font_small.render("Pickup: Dadar West  ·  Drop: Marine Drive",
                                     True, self.HUD_DIM_COLOR)
        surface.blit(sub, (card.x + 16, card.y + 50))

        pygame.draw.rect(surface, self.ACCEPT_COLOR, (btn.x, btn.y, btn.w, btn.h),
                         border_radius=8)
        label = self.font_small.render(btn.label, True, (10, 20, 10))
        surface.blit(label, label.get_rect(center=(btn.x + btn.w // 2, btn.y + btn.h // 2)))

    # ------------------------------------------------------------------ #
    #  Navigation header (trip screens)                                    #
    # ------------------------------------------------------------------ #

    def _draw_nav_header(self, surface: pygame.Surface, destination: str, progress: float) -> None:
        if self.font_small is None or self.font_tiny is None:
            return
        panel = pygame.Rect(12, 12, self.width - 24, 54)
        draw_alpha_rect(surface, self.HUD_BG_COLOR, panel, border_radius=8)
        pygame.draw.rect(surface, self.HUD_BORDER_COLOR, panel, width=1, border_radius=8)

        head = self.font_small.render(f"Heading to {destination}", True, self.HUD_TEXT_COLOR)
        surface.blit(head, (panel.x + 12, panel.y + 8))

        bar = pygame.Rect(panel.x + 12, panel.bottom - 16, panel.w - 24, 5)
        pygame.draw.rect(surface, (40, 48, 64), bar, border_radius=2)
        done = int(bar.w * max(0.0, min(1.0, progress)))
        if done > 0:
            pygame.draw.rect(surface, (59, 130, 246), (bar.x, bar.y, done, bar.h),
                             border_radius=2)

        hint = self.font_tiny.render("N reroute   SPACE pause   F3 debug",
                                     True, self.HUD_DIM_COLOR)
        surface.blit(hint, hint.get_rect(topright=(panel.right - 12, panel.y + 10)))

    # ------------------------------------------------------------------ #
    #  Debug overlay                                                       #
    # ------------------------------------------------------------------ #

    def _draw_debug_overlay(self, surface: pygame.Surface, dt: float) -> None:
        if self.font_tiny is None:
            return
        fps = self.clock.get_fps() if self.clock else 0.0
        lines = [
            f"FPS   {fps:.1f}",
            f"DT    {dt * 1000:.1f} ms",
            f"RES   {self.width}x{self.height}",
        ]
        if self.camera is not None:
            state = self.camera.snapshot()
            tf = self.camera.compute_transform(self.width, self.height)
            lines += [
                f"CAR   {state.tracked.x:.1f}, {state.tracked.y:.1f}",
                f"DRIFT {state.drift.x:+.1f}, {state.drift.y:+.1f}",
                f"XFORM {tf.translate_x:.1f}, {tf.translate_y:.1f} @ {tf.scale:.1f}x",
            ]
            mouse = tf.screen_to_map(pygame.mouse.get_pos())
            lines.append(f"MOUSE {mouse.x:.1f}, {mouse.y:.1f}")
        m = self.drift_source.metrics.report()
        lines.append(f"GPS   rx {m['received']} stale {m['stale']} "
                     f"drop {m['dropped']} err {m['errors']}")
        color = self.WARNING_COLOR if m["errors"] else (0, 255, 127)
        x, y = 16, 76
        for line in lines:
            text = self.font_tiny.render(line, True, color)
            surface.blit(text, (x, y))
            y += 14

    # ------------------------------------------------------------------ #
    #  Pause banner                                                        #
    # ------------------------------------------------------------------ #

    def _draw_pause_banner(self, surface: pygame.Surface) -> None:
        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 100))
        surface.blit(overlay, (0, 0))
        if self.font_title:
            text = self.font_title.render("PAUSED", True, (220, 220, 220))
            surface.blit(text, text.get_rect(center=(self.width // 2, self.height // 2)))
