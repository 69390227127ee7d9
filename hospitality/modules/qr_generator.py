"""
QR Code Generator Module - Hospitality Desk
Author: Hospitality Desk Team
Date: October 2026

This module renders the codes the registration kiosk scans: the guest's
Profile QR (JSON ``{"student_id": ...}``) and the printed badge QR carrying
the badge id. Images are PNG, returned base64-encoded so they can be served
as JSON.

Features:
- Profile QR and badge QR generation
- Optional caption under the code (guest name, badge id)
"""

import base64
import io
import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import qrcode
from PIL import Image, ImageDraw, ImageFont

from hospitality.modules.identifiers import require_badge_id


class QRGenerator:
    """
    QR code renderer for guest profiles and badges.
    """

    def __init__(self, settings: Optional[Dict[str, Any]] = None):
        """
        Initialize the generator.

        Args:
            settings (dict): Overrides for the default QR settings
        """
        self.logger = logging.getLogger(__name__)

        self.default_settings = {
            'version': 1,
            'error_correction': qrcode.constants.ERROR_CORRECT_M,  # ~15% error correction
            'box_size': 10,
            'border': 4,
            'fill_color': 'black',
            'back_color': 'white'
        }
        if settings:
            self.default_settings.update(settings)

    @staticmethod
    def profile_payload(student_id: str) -> str:
        """Profile QR text for a student id."""
        return json.dumps({'student_id': student_id})

    def _render(self, data: str, caption_lines: Optional[List[str]] = None) -> Image.Image:
        settings = self.default_settings
        qr = qrcode.QRCode(
            version=settings['version'],
            error_correction=settings['error_correction'],
            box_size=settings['box_size'],
            border=settings['border']
        )
        qr.add_data(data)
        qr.make(fit=True)

        img = qr.make_image(
            fill_color=settings['fill_color'],
            back_color=settings['back_color']
        ).convert('RGB')

        if caption_lines:
            img = self._add_caption(img, caption_lines)
        return img

    def _add_caption(self, qr_img: Image.Image, lines: List[str]) -> Image.Image:
        """Extend the canvas and draw centred caption lines below the code."""
        line_height = 22
        width, height = qr_img.size
        canvas = Image.new('RGB', (width, height + line_height * len(lines) + 10), 'white')
        canvas.paste(qr_img, (0, 0))

        draw = ImageDraw.Draw(canvas)
        font = ImageFont.load_default()

        text_y = height + 5
        for line in lines:
            bbox = draw.textbbox((0, 0), line, font=font)
            text_width = bbox[2] - bbox[0]
            draw.text(((width - text_width) // 2, text_y), line, fill='black', font=font)
            text_y += line_height

        return canvas

    @staticmethod
    def _encode_png(img: Image.Image) -> str:
        buffer = io.BytesIO()
        img.save(buffer, format='PNG')
        return base64.b64encode(buffer.getvalue()).decode()

    def generate_profile_qr(self, profile: Dict[str, Any], with_caption: bool = False) -> Dict[str, Any]:
        """
        Generate the Profile QR for a guest.

        Args:
            profile (dict): Profile data, must contain ``student_id``
            with_caption (bool): Print name and student id under the code

        Returns:
            Dict[str, Any]: Generation result with the base64 PNG
        """
        try:
            student_id = profile['student_id']
            payload = self.profile_payload(student_id)
            caption = [profile.get('name', ''), student_id] if with_caption else None
            img = self._render(payload, caption)

            self.logger.info(f"Profile QR generated for {student_id}")
            return {
                'success': True,
                'qr_data': payload,
                'image_base64': self._encode_png(img),
                'image_size': img.size,
                'filename': f"profile_{student_id}.png",
                'student_id': student_id,
                'generated_at': datetime.now().isoformat()
            }

        except Exception as e:
            self.logger.error(f"Profile QR generation failed: {str(e)}")
            return {
                'success': False,
                'error': str(e),
                'student_id': profile.get('student_id', 'unknown')
            }

    def generate_badge_qr(self, badge_id: str, with_caption: bool = True) -> Dict[str, Any]:
        """
        Generate the QR printed on a badge. The payload is the badge id itself.

        Args:
            badge_id (str): Badge id (format A123)
            with_caption (bool): Print the badge id under the code
        """
        try:
            require_badge_id(badge_id)
            img = self._render(badge_id, [badge_id] if with_caption else None)

            return {
                'success': True,
                'qr_data': badge_id,
                'image_base64': self._encode_png(img),
                'image_size': img.size,
                'filename': f"badge_{badge_id}.png",
                'badge_id': badge_id,
                'generated_at': datetime.now().isoformat()
            }

        except Exception as e:
            self.logger.error(f"Badge QR generation failed for {badge_id}: {str(e)}")
            return {
                'success': False,
                'error': str(e),
                'badge_id': badge_id
            }
