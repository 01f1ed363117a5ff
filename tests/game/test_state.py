"""Tests for MoveRecord."""

from chessrules.core.enums import Color, MoveType, PieceType
from chessrules.core.move import Move
from chessrules.core.piece import Pawn, Rook
from chessrules.core.types import Square
from chessrules.game.state import MoveRecord


class TestMoveRecord:
    def test_promotion_with_capture(self) -> None:
        pawn = Pawn(Color.WHITE, Square(7, 0))
        rook = Rook(Color.BLACK, Square(7, 0))
        record = MoveRecord(
            origin=Square(6, 1),
            move=Move(Square(7, 0), MoveType.PROMOTE_WITH_CAPTURE),
            piece=pawn,
            captured_piece=rook,
            promotion=PieceType.QUEEN,
            score=13,
            captured=(rook,),
        )
        assert record.was_capture
        data = record.to_dict()
        assert data == {
            "currentPosition": "61",
            "move": {"position": "70", "moveType": "promoteWithCapture"},
            "piece": pawn.piece_id,
            "capturedPiece": rook.piece_id,
            "promotionPieceType": "Queen",
            "inGamePoints": 13,
        }

    def test_plain_move(self) -> None:
        pawn = Pawn(Color.BLACK, Square(5, 0))
        record = MoveRecord(
            origin=Square(6, 0),
            move=Move(Square(5, 0)),
            piece=pawn,
            captured_piece=None,
            promotion=None,
            score=0,
            captured=(),
        )
        assert not record.was_capture
        assert record.to_dict()["promotionPieceType"] is None
