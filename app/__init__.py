"""
Fortune Statistics Service

띠/별자리/시진 기반 AI 운세 생성 서비스
- 오늘의 운세 (+ 재물/애정/직업/건강 점수)
- 무의식 리딩 (조력자/방해꾼)
- 시간 밸런스 (과거/현재/미래)
- 이용 통계 집계 및 이탈률
"""

__version__ = "1.0.0"
__author__ = "Fortune Service Team"
